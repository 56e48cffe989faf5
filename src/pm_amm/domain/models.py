"""AMM domain models: pure dataclasses, no business logic."""
from dataclasses import dataclass

from src.pm_common.enums import SwapDirection


@dataclass
class ReservePair:
    """Pool reserves in integral token units. A = base, B = quote."""

    reserve_in: int  # A
    reserve_out: int  # B

    @property
    def k(self) -> int:
        # Derived on every read so it can never drift from the reserves
        return self.reserve_in * self.reserve_out


@dataclass(frozen=True)
class AmmQuote:
    """Result of one constant-product quote."""

    in_amount: int
    out_amount: int
    price_impact_bps: int
    direction: SwapDirection
    fee_amount: int  # input units withheld before the invariant solve
    reserve_in_after: int
    reserve_out_after: int
