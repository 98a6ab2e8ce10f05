# reel_engine/domain/machine/entities/slot_machine.py
import logging
from dataclasses import replace
from typing import Dict, List, Any, Optional

from reel_engine.domain.errors import ConfigurationError
from .grid import Grid, grid_names, make_grid
from .reel import Reel
from .symbol import Symbol, SymbolCatalog


class SlotMachine:
    """
    Represents a slot machine: a symbol catalog and the weighted reels drawn
    from it. Core entity in the machine domain.
    """
    def __init__(self, machine_id: str, config: Dict[str, Any], rng_strategy=None):
        """
        Initialize the slot machine.

        Args:
            machine_id: Unique identifier for this machine
            config: Game configuration dictionary ('symbols' and 'machine' sections)
            rng_strategy: Random number generator strategy (optional)

        Raises:
            ConfigurationError: If the catalog or reel layout is unusable
        """
        self.id = machine_id
        self.logger = logging.getLogger(f"domain.machine.{machine_id}")
        self.logger.info(f"Initializing slot machine: {machine_id}")

        self.config = config
        self.rng = rng_strategy

        machine_config = config.get("machine", {})
        self.rows = int(machine_config.get("rows", 3))
        if self.rows < 1:
            raise ConfigurationError(f"Machine {machine_id}: rows must be >= 1, got {self.rows}")

        self.catalog = SymbolCatalog.from_config(config.get("symbols", []))
        self._load_reels(machine_config)

        self.logger.info(
            f"Slot machine {machine_id} initialized with {len(self.reels)} reels x {self.rows} rows"
        )

    def _load_reels(self, machine_config: Dict[str, Any]):
        """
        Build one weighted reel per configured reel.

        Every reel draws from the full catalog; 'reel_weights' may override the
        weight of named symbols on a given reel.

        Args:
            machine_config: The 'machine' section of the configuration
        """
        num_reels = int(machine_config.get("reels", 3))
        if num_reels < 1:
            raise ConfigurationError(f"Machine {self.id}: reels must be >= 1, got {num_reels}")

        overrides = machine_config.get("reel_weights", {}) or {}
        unknown = [name for weights in overrides.values() for name in weights
                   if self.catalog.get(name) is None]
        if unknown:
            raise ConfigurationError(f"Machine {self.id}: weight overrides for unknown symbols {unknown}")

        self.reels: List[Reel] = []
        for i in range(num_reels):
            reel_name = f"reel{i + 1}"
            reel_overrides = overrides.get(reel_name, {})
            pool = [
                replace(symbol, weight=float(reel_overrides[symbol.name]))
                if symbol.name in reel_overrides else symbol
                for symbol in self.catalog
            ]
            self.reels.append(Reel(pool, f"{self.id}_{reel_name}", self.rng))
            if reel_overrides:
                self.logger.debug(f"Reel {reel_name} weight overrides: {reel_overrides}")

    def set_rng(self, rng_strategy):
        """
        Set or update the RNG strategy for the machine and all its reels.

        Args:
            rng_strategy: RNG strategy instance
        """
        self.rng = rng_strategy
        for reel in self.reels:
            reel.set_rng(rng_strategy)
        self.logger.debug(f"Updated RNG strategy: {type(rng_strategy).__name__}")

    def spin_grid(self, rows: Optional[int] = None) -> Grid:
        """
        Draw a row-major grid, one independent draw per (row, reel) cell.

        Args:
            rows: Number of rows (default: configured rows)

        Returns:
            Grid of rows x reels symbols
        """
        rows = self.rows if rows is None else rows
        grid = make_grid([[reel.draw() for reel in self.reels] for _ in range(rows)])
        self.logger.debug(f"Spin grid: {grid_names(grid)}")
        return grid

    def spin_columns(self, rows: Optional[int] = None) -> List[List[Symbol]]:
        """
        Draw one target column per reel for the animated mode. A name never
        repeats within a column.

        Args:
            rows: Symbols per column (default: configured rows)

        Returns:
            List of columns, each ordered top..bottom
        """
        rows = self.rows if rows is None else rows
        columns = [reel.draw_distinct(rows) for reel in self.reels]
        self.logger.debug(f"Spin columns: {[[s.name for s in column] for column in columns]}")
        return columns

    def get_info(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'reels': len(self.reels),
            'rows': self.rows,
            'symbols': self.catalog.names,
            'rng': type(self.rng).__name__ if self.rng else None,
        }


def spin_grid(machine: SlotMachine, rows: int) -> Grid:
    return machine.spin_grid(rows)
