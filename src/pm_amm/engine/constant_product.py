"""AmmEngine: constant-product (x * y = k) quote engine with an input-side fee."""
import logging

from config.settings import settings
from src.pm_amm.domain.models import AmmQuote, ReservePair
from src.pm_common.bps import deduct_fee, to_bps, validate_fee_bps
from src.pm_common.enums import SwapDirection
from src.pm_common.errors import (
    InvalidDirectionError,
    InvalidFeeError,
    InvalidInputError,
    InvalidReservesError,
    OutputTooSmallError,
    PoolDegenerateError,
)

logger = logging.getLogger(__name__)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _direction(value: object) -> SwapDirection:
    try:
        return SwapDirection(value)
    except ValueError:
        raise InvalidDirectionError(value) from None


class AmmEngine:
    """Single pool. Each successful quote replaces the reserves as if the swap executed.

    Not thread-safe: callers serialize access per instance.
    """

    def __init__(self, reserve_in: int, reserve_out: int, fee_bps: int | None = None) -> None:
        if not (_is_int(reserve_in) and _is_int(reserve_out)):
            raise InvalidReservesError("reserves must be integers")
        if reserve_in < 0 or reserve_out < 0:
            raise InvalidReservesError(
                f"reserves must be non-negative, got ({reserve_in}, {reserve_out})"
            )
        fee = settings.AMM_FEE_BPS if fee_bps is None else fee_bps
        if not _is_int(fee):
            raise InvalidFeeError(fee)
        validate_fee_bps(fee)
        self.reserves = ReservePair(reserve_in=reserve_in, reserve_out=reserve_out)
        self.fee_bps: int = fee

    @property
    def reserve_in(self) -> int:
        return self.reserves.reserve_in

    @property
    def reserve_out(self) -> int:
        return self.reserves.reserve_out

    @property
    def k(self) -> int:
        return self.reserves.k

    def spot_price(self, direction: SwapDirection) -> float:
        """A/B for A_TO_B, B/A for B_TO_A."""
        direction = _direction(direction)
        a, b = self.reserve_in, self.reserve_out
        if a == 0 or b == 0:
            raise PoolDegenerateError(a, b)
        if direction == SwapDirection.A_TO_B:
            return a / b
        return b / a

    def preview(self, amount: int, direction: SwapDirection) -> AmmQuote:
        """Compute the quote without touching the reserves."""
        return self._compute(amount, direction)

    def quote(self, amount: int, direction: SwapDirection) -> AmmQuote:
        """Compute the quote and advance the reserves. Failed quotes leave state untouched."""
        q = self._compute(amount, direction)
        self.reserves = ReservePair(
            reserve_in=q.reserve_in_after, reserve_out=q.reserve_out_after
        )
        logger.info(
            "AMM reserves updated: A=%d, B=%d (out=%d, impact=%dbp)",
            q.reserve_in_after, q.reserve_out_after, q.out_amount, q.price_impact_bps,
        )
        return q

    def _compute(self, amount: int, direction: SwapDirection) -> AmmQuote:
        if not _is_int(amount):
            raise InvalidInputError(f"Input amount must be an integer, got {amount!r}")
        if amount <= 0:
            raise InvalidInputError()
        direction = _direction(direction)

        a, b = self.reserve_in, self.reserve_out
        k = a * b
        effective = deduct_fee(amount, self.fee_bps)

        if direction == SwapDirection.A_TO_B:
            after_a = a + effective
            after_b = k // after_a if after_a else 0
            out_amount = b - after_b - 1  # -1: never pay out more than the invariant allows
        else:
            after_b = b + effective
            after_a = k // after_b if after_b else 0
            out_amount = a - after_a - 1

        if after_a == 0 or after_b == 0:
            raise PoolDegenerateError(after_a, after_b)
        if out_amount <= 0:
            raise OutputTooSmallError(amount)

        if direction == SwapDirection.A_TO_B:
            before_price, after_price = a / b, after_a / after_b
        else:
            before_price, after_price = b / a, after_b / after_a
        impact = to_bps(abs(after_price - before_price) / before_price)

        logger.debug(
            "AMM quote %s: in=%d effective=%d out=%d impact=%dbp",
            direction.value, amount, effective, out_amount, impact,
        )
        return AmmQuote(
            in_amount=amount,
            out_amount=out_amount,
            price_impact_bps=impact,
            direction=direction,
            fee_amount=amount - effective,
            reserve_in_after=after_a,
            reserve_out_after=after_b,
        )
