# reel_engine/domain/session/entities/spin_result.py
from typing import Dict, List, Any
from dataclasses import dataclass, field, asdict
import time


@dataclass
class SpinResult:
    """
    Record of one resolved spin.
    """
    session_id: str
    spin_number: int
    mode: str
    timestamp: float = field(default_factory=time.time)

    bet: float = 0.0
    payout: float = 0.0
    balance_before: float = 0.0
    balance_after: float = 0.0

    # Row-major symbol names
    grid: List[List[str]] = field(default_factory=list)
    winning_lines: List[Dict[str, Any]] = field(default_factory=list)
    big_win: bool = False

    @property
    def profit(self) -> float:
        return self.payout - self.bet

    @property
    def is_win(self) -> bool:
        return bool(self.winning_lines)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["profit"] = self.profit
        return data
