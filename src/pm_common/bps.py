"""Basis-point and fee arithmetic shared by the AMM and ladder engines.

AMM amounts are integral token units; ladder amounts are floats. Fee rates are
always expressed in basis points (1 bp = 1/10000).
"""

from src.pm_common.errors import InvalidFeeError

BPS_SCALE = 10_000


def validate_fee_bps(fee_bps: float) -> None:
    """Validate that a fee rate is in the range [0, 10000) bps."""
    if isinstance(fee_bps, bool) or not (0 <= fee_bps < BPS_SCALE):
        raise InvalidFeeError(fee_bps)


def deduct_fee(amount: int, fee_bps: int) -> int:
    """Integer amount left after withholding the fee, truncated.

    effective = amount * (10000 - fee_bps) // 10000
    """
    if fee_bps == 0:
        return amount
    return amount * (BPS_SCALE - fee_bps) // BPS_SCALE


def deflate_by_fee(amount: float, fee_bps: float) -> float:
    """Budget left once a taker fee charged on top is carved out.

    budget = amount / (1 + fee_bps / 10000), so budget * (1 + fee) == amount.
    """
    return amount / (1 + fee_bps / BPS_SCALE)


def to_bps(fraction: float) -> int:
    """Convert a non-negative fraction to whole basis points: 0.0123 -> 123."""
    return int(fraction * BPS_SCALE)
