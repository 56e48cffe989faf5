"""LadderEngine: taker quotes against a discrete order-book ladder."""
import logging
import math

from config.settings import settings
from src.pm_common.bps import deflate_by_fee, validate_fee_bps
from src.pm_common.enums import LadderSide, SwapDirection
from src.pm_common.errors import InsufficientLiquidityError, InvalidInputError
from src.pm_ladder.domain.models import Ladder, LadderQuote, side_for_direction
from src.pm_ladder.engine.walk_algo import (
    WalkResult,
    base_out_from_quote_budget,
    quote_out_from_base_budget,
)

logger = logging.getLogger(__name__)


class LadderEngine:
    """Owns the current ladder snapshot and advances it with every quote.

    Snapshots are immutable: the engine never mutates a Ladder it was given,
    it installs the depleted copy and hands it back in LadderQuote.ladder.

    Failure policy when a walk runs out of liquidity:
      atomic=False  levels walked before the failure stay depleted
      atomic=True   the pre-quote snapshot is kept
    """

    def __init__(
        self,
        ladder: Ladder,
        taker_fee_bps: float | None = None,
        atomic: bool | None = None,
    ) -> None:
        fee = settings.LADDER_TAKER_FEE_BPS if taker_fee_bps is None else taker_fee_bps
        validate_fee_bps(fee)
        self.taker_fee_bps: float = float(fee)
        self.atomic: bool = settings.LADDER_ATOMIC_FILLS if atomic is None else atomic
        self._ladder = ladder

    @property
    def ladder(self) -> Ladder:
        return self._ladder

    def load(self, ladder: Ladder) -> None:
        """Replace the snapshot with a fresh one from upstream."""
        self._ladder = ladder
        logger.info(
            "Ladder loaded: %d asks, %d bids", len(ladder.asks), len(ladder.bids)
        )

    def preview(self, amount: float, direction: SwapDirection) -> LadderQuote:
        """Compute the quote without installing the depleted snapshot."""
        return self._compute(amount, direction)

    def quote(self, amount: float, direction: SwapDirection) -> LadderQuote:
        try:
            q = self._compute(amount, direction)
        except InsufficientLiquidityError as e:
            if not self.atomic and e.ladder is not None:
                self._ladder = e.ladder
                logger.warning(
                    "Ladder walk ran dry (unfilled=%.6f); walked levels stay depleted",
                    e.unfilled,
                )
            raise
        self._ladder = q.ladder
        if q.ladder_exhausted:
            logger.warning("Ladder exhausted after quote: one side has no resting size")
        return q

    def _compute(self, amount: float, direction: SwapDirection) -> LadderQuote:
        if isinstance(amount, bool) or not math.isfinite(amount) or amount <= 0:
            raise InvalidInputError()

        side = side_for_direction(direction)
        direction = SwapDirection(direction)
        budget = deflate_by_fee(amount, self.taker_fee_bps)
        walk = self._walk(side, budget)
        updated = self._ladder.with_levels(side, walk.levels)

        if not walk.filled:
            raise InsufficientLiquidityError(
                f"Not enough liquidity for the requested amount: {walk.unfilled:.6f} unfilled",
                unfilled=walk.unfilled,
                ladder=updated,
            )

        effective_price = walk.quote_traded / walk.base_traded if walk.base_traded else 0.0
        logger.debug(
            "Ladder quote %s: in=%s budget=%.6f out=%.6f levels=%d",
            direction.value, amount, budget, walk.out_amount, walk.levels_touched,
        )
        return LadderQuote(
            in_amount=amount,
            out_amount=walk.out_amount,
            direction=direction,
            effective_price=effective_price,
            levels_touched=walk.levels_touched,
            ladder=updated,
            ladder_exhausted=updated.is_exhausted,
        )

    def _walk(self, side: LadderSide, budget: float) -> WalkResult:
        if side == LadderSide.ASK:
            return base_out_from_quote_budget(self._ladder.asks, budget)
        return quote_out_from_base_budget(self._ladder.bids, budget)
