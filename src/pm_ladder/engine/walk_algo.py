"""Greedy level walk: convert a budget into output by consuming levels best-first."""
import math
from dataclasses import dataclass

from src.pm_common.errors import InvalidInputError
from src.pm_ladder.domain.models import LadderLevel


@dataclass(frozen=True)
class WalkResult:
    out_amount: float
    unfilled: float  # budget left after the last level; > 0 means not enough liquidity
    levels: tuple[LadderLevel, ...]  # side after depletion
    levels_touched: int
    base_traded: float
    quote_traded: float

    @property
    def filled(self) -> bool:
        return self.unfilled <= 0


def base_out_from_quote_budget(asks: tuple[LadderLevel, ...], quote_budget: float) -> WalkResult:
    """Spend a quote-denominated budget against asks, accumulating base."""
    if not math.isfinite(quote_budget) or quote_budget <= 0:
        raise InvalidInputError("Quote units must be greater than zero")
    return _walk_asks(asks, quote_budget)


def quote_out_from_base_budget(bids: tuple[LadderLevel, ...], base_budget: float) -> WalkResult:
    """Sell a base-denominated budget into bids, accumulating quote."""
    if not math.isfinite(base_budget) or base_budget <= 0:
        raise InvalidInputError("Base units must be greater than zero")
    return _walk_bids(bids, base_budget)


def _walk_asks(asks: tuple[LadderLevel, ...], budget: float) -> WalkResult:
    base_out = 0.0
    spent = 0.0
    touched = 0
    levels: list[LadderLevel] = []
    for level in asks:
        if budget <= 0 or level.size <= 0:
            levels.append(level)
            continue
        touched += 1
        if level.notional >= budget:
            # partial level: just enough base to use up the budget
            take = budget / level.price
            base_out += take
            spent += budget
            budget = 0.0
            levels.append(level.with_size(level.size - take))
        else:
            base_out += level.size
            spent += level.notional
            budget -= level.notional
            levels.append(level.with_size(0.0))
    return WalkResult(
        out_amount=base_out,
        unfilled=budget,
        levels=tuple(levels),
        levels_touched=touched,
        base_traded=base_out,
        quote_traded=spent,
    )


def _walk_bids(bids: tuple[LadderLevel, ...], budget: float) -> WalkResult:
    quote_out = 0.0
    sold = 0.0
    touched = 0
    levels: list[LadderLevel] = []
    for level in bids:
        if budget <= 0 or level.size <= 0:
            levels.append(level)
            continue
        touched += 1
        if level.size >= budget:
            quote_out += budget * level.price
            sold += budget
            levels.append(level.with_size(level.size - budget))
            budget = 0.0
        else:
            quote_out += level.notional
            sold += level.size
            budget -= level.size
            levels.append(level.with_size(0.0))
    return WalkResult(
        out_amount=quote_out,
        unfilled=budget,
        levels=tuple(levels),
        levels_touched=touched,
        base_traded=sold,
        quote_traded=quote_out,
    )
