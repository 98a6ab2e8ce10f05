# reel_engine/domain/machine/services/payout.py
from typing import Iterable

from .win_evaluation import WinningLine


def line_payout(line: WinningLine, bet: float) -> float:
    """Every symbol on a winning line shares one name, so the first one pays."""
    symbol = line.symbols[0]
    return symbol.multiplier * bet + symbol.addition


def total_payout(lines: Iterable[WinningLine], bet: float) -> float:
    return sum((line_payout(line, bet) for line in lines), 0.0)


def update_pool(pool: float, lines: Iterable[WinningLine], bet: float) -> float:
    """
    Credit the payout of ``lines`` to ``pool`` and return the new balance.
    Only ever adds: the bet is debited when the spin starts.
    """
    return pool + total_payout(lines, bet)
