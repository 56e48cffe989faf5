"""Ladder domain models: immutable snapshots of resting liquidity."""
import math
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from src.pm_common.enums import LadderSide, SwapDirection
from src.pm_common.errors import InvalidDirectionError, InvalidLevelError


@dataclass(frozen=True)
class LadderLevel:
    """Single price level. price = quote units per base unit, size = base units."""

    price: float
    size: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.price) or self.price <= 0:
            raise InvalidLevelError(f"price must be finite and positive, got {self.price}")
        if not math.isfinite(self.size) or self.size < 0:
            raise InvalidLevelError(f"size must be finite and non-negative, got {self.size}")

    @property
    def notional(self) -> float:
        return self.price * self.size

    def with_size(self, size: float) -> "LadderLevel":
        return replace(self, size=max(size, 0.0))


@dataclass(frozen=True)
class RawLadderLevel:
    """Level as published by an exchange feed, in price ticks and base lots."""

    price_in_ticks: float
    size_in_base_lots: float


@dataclass(frozen=True)
class Ladder:
    """Asks ascending by price, bids descending by price.

    Sort order is a caller contract: nothing here sorts or checks it.
    """

    asks: tuple[LadderLevel, ...] = field(default_factory=tuple)
    bids: tuple[LadderLevel, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept lists from callers but store tuples
        object.__setattr__(self, "asks", tuple(self.asks))
        object.__setattr__(self, "bids", tuple(self.bids))

    @classmethod
    def from_pairs(
        cls,
        asks: Iterable[tuple[float, float]] = (),
        bids: Iterable[tuple[float, float]] = (),
    ) -> "Ladder":
        """Build from (price, size) pairs."""
        return cls(
            asks=tuple(LadderLevel(price=p, size=s) for p, s in asks),
            bids=tuple(LadderLevel(price=p, size=s) for p, s in bids),
        )

    @classmethod
    def from_raw(
        cls,
        asks: Iterable[RawLadderLevel],
        bids: Iterable[RawLadderLevel],
        tick_size: float,
        base_lot_size: float,
    ) -> "Ladder":
        """Convert feed levels: price = ticks * tick_size, size = lots * base_lot_size.

        Empty levels are dropped; order is kept as supplied.
        """
        if tick_size <= 0 or base_lot_size <= 0:
            raise InvalidLevelError(
                f"tick_size and base_lot_size must be positive, got {tick_size}, {base_lot_size}"
            )

        def convert(raw: Iterable[RawLadderLevel]) -> tuple[LadderLevel, ...]:
            return tuple(
                LadderLevel(
                    price=r.price_in_ticks * tick_size,
                    size=r.size_in_base_lots * base_lot_size,
                )
                for r in raw
                if r.size_in_base_lots > 0
            )

        return cls(asks=convert(asks), bids=convert(bids))

    def levels(self, side: LadderSide) -> tuple[LadderLevel, ...]:
        return self.asks if side == LadderSide.ASK else self.bids

    def with_levels(self, side: LadderSide, levels: Iterable[LadderLevel]) -> "Ladder":
        if side == LadderSide.ASK:
            return replace(self, asks=tuple(levels))
        return replace(self, bids=tuple(levels))

    def is_side_empty(self, side: LadderSide) -> bool:
        return not any(lv.size > 0 for lv in self.levels(side))

    @property
    def is_exhausted(self) -> bool:
        """True once either side has no resting size left."""
        return self.is_side_empty(LadderSide.ASK) or self.is_side_empty(LadderSide.BID)

    @property
    def best_ask(self) -> LadderLevel | None:
        return next((lv for lv in self.asks if lv.size > 0), None)

    @property
    def best_bid(self) -> LadderLevel | None:
        return next((lv for lv in self.bids if lv.size > 0), None)

    def total_size(self, side: LadderSide) -> float:
        return sum(lv.size for lv in self.levels(side))

    def total_notional(self, side: LadderSide) -> float:
        return sum(lv.notional for lv in self.levels(side))


def side_for_direction(direction: SwapDirection) -> LadderSide:
    """A_TO_B spends quote against asks; B_TO_A sells base into bids."""
    try:
        direction = SwapDirection(direction)
    except ValueError:
        raise InvalidDirectionError(direction) from None
    if direction == SwapDirection.A_TO_B:
        return LadderSide.ASK
    return LadderSide.BID


@dataclass(frozen=True)
class LadderQuote:
    """Result of one ladder walk."""

    in_amount: float
    out_amount: float
    direction: SwapDirection
    effective_price: float  # quote units per base unit actually traded
    levels_touched: int
    ladder: Ladder  # snapshot after the walk
    ladder_exhausted: bool = False
