"""Symbol table and symbol table entries.

This module defines `SymbolTableEntry`, the per-variable storage cell that
holds a variable's current numeric value, and `SymbolTable`, a single flat
mapping from lowercased identifier names to entries. There is no nesting of
scopes: every name in a program lives in the one table for the lifetime of
the run. The parser enters and looks up names; the executor reads and writes
entry values through the references held by VARIABLE nodes.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Dict, Iterator


@dataclass(eq=False)
class SymbolTableEntry:
    name: str
    value: float = 0.0

    def __repr__(self) -> str:
        return f"SymbolTableEntry({self.name}, value={self.value})"


class SymbolTable:
    def __init__(self):
        self.symbols: Dict[str, SymbolTableEntry] = {}

    def enter(self, name: str) -> SymbolTableEntry:
        """Enter a name, returning its entry (an existing one is reused)."""
        key = name.lower()
        if key in self.symbols:
            return self.symbols[key]

        entry = SymbolTableEntry(name)
        self.symbols[key] = entry
        return entry

    def lookup(self, name: str) -> Optional[SymbolTableEntry]:
        """Look up a name case-insensitively; None when it was never entered."""
        return self.symbols.get(name.lower())

    def exists(self, name: str) -> bool:
        return name.lower() in self.symbols

    def __contains__(self, name: str) -> bool:
        return self.exists(name)

    def __iter__(self) -> Iterator[SymbolTableEntry]:
        return iter(self.symbols.values())

    def __len__(self) -> int:
        return len(self.symbols)
