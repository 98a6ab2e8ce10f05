# reel_engine/domain/machine/entities/symbol.py
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from reel_engine.domain.errors import ConfigurationError


@dataclass(frozen=True)
class Symbol:
    """
    A named, weighted payout unit drawn onto the grid.

    Line matching compares symbols by ``name`` only; ``icon`` is display data.
    """
    icon: str
    name: str
    multiplier: float = 0.0
    addition: float = 0.0
    weight: float = 1.0

    def matches(self, other: "Symbol") -> bool:
        return self.name == other.name

    def __str__(self) -> str:
        return self.name


class SymbolCatalog:
    """
    Ordered collection of symbols shared by every reel of a machine.

    Enforces that a name maps to exactly one (multiplier, addition) pair, so
    the payout of a winning line can be read from its first symbol.
    """
    def __init__(self, symbols: List[Symbol]):
        self.logger = logging.getLogger("domain.machine.catalog")

        if not symbols:
            self.logger.error("Symbol catalog is empty")
            raise ConfigurationError("Symbol catalog must contain at least one symbol")

        payouts: Dict[str, tuple] = {}
        for symbol in symbols:
            if symbol.multiplier < 0 or symbol.addition < 0:
                raise ConfigurationError(
                    f"Symbol {symbol.name}: multiplier and addition must be >= 0"
                )
            payout = (symbol.multiplier, symbol.addition)
            known = payouts.setdefault(symbol.name, payout)
            if known != payout:
                error_msg = (f"Symbol {symbol.name} has conflicting payouts: "
                             f"{known} vs {payout}")
                self.logger.error(error_msg)
                raise ConfigurationError(error_msg)

        self._symbols = list(symbols)
        self.logger.debug(f"Catalog built with {len(self._symbols)} symbols: {self.names}")

    @classmethod
    def from_config(cls, symbols_config: List[Dict[str, Any]]) -> "SymbolCatalog":
        """
        Build a catalog from the ``symbols`` section of a game configuration.

        Args:
            symbols_config: List of dicts with icon, name, multiplier, addition, weight

        Returns:
            SymbolCatalog instance
        """
        symbols = []
        for i, entry in enumerate(symbols_config or []):
            if not isinstance(entry, dict) or "name" not in entry:
                raise ConfigurationError(f"Invalid symbol entry at index {i}: {entry}")
            symbols.append(Symbol(
                icon=str(entry.get("icon", entry["name"])),
                name=str(entry["name"]),
                multiplier=float(entry.get("multiplier", 0.0)),
                addition=float(entry.get("addition", 0.0)),
                weight=float(entry.get("weight", 1.0)),
            ))
        return cls(symbols)

    @property
    def symbols(self) -> List[Symbol]:
        return list(self._symbols)

    @property
    def names(self) -> List[str]:
        seen = []
        for symbol in self._symbols:
            if symbol.name not in seen:
                seen.append(symbol.name)
        return seen

    def get(self, name: str) -> Optional[Symbol]:
        for symbol in self._symbols:
            if symbol.name == name:
                return symbol
        return None

    def __getitem__(self, name: str) -> Symbol:
        symbol = self.get(name)
        if symbol is None:
            raise KeyError(name)
        return symbol

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __repr__(self) -> str:
        return f"SymbolCatalog(names={self.names})"


def default_catalog() -> SymbolCatalog:
    """The classic five-symbol catalog."""
    return SymbolCatalog([
        Symbol("🍒", "Cherry", 2.0, 0.0, 50.0),
        Symbol("🍋", "Lemon", 3.0, 0.0, 30.0),
        Symbol("🔔", "Bell", 5.0, 0.0, 15.0),
        Symbol("⭐", "Star", 10.0, 0.0, 4.0),
        Symbol("7️⃣", "Seven", 20.0, 0.0, 1.0),
    ])
