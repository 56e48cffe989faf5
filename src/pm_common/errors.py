"""Unified error codes and quote exceptions.

Error code ranges:
  1xxx: Invalid input (amounts, reserves, levels, fees, direction)
  2xxx: Insufficient liquidity
  3xxx: Degenerate pool state
  9xxx: Service
"""

from typing import Any

from src.pm_common.enums import ErrorKind


class QuoteError(Exception):
    """Base quote error."""

    def __init__(
        self,
        code: int,
        message: str,
        kind: ErrorKind,
    ) -> None:
        self.code = code
        self.message = message
        self.kind = kind
        super().__init__(message)


# --- 1xxx: Invalid input ---

class InvalidInputError(QuoteError):
    def __init__(self, detail: str = "Input amount must be greater than zero") -> None:
        super().__init__(1001, detail, ErrorKind.INVALID_INPUT)


class OutputTooSmallError(QuoteError):
    def __init__(self, amount: int) -> None:
        super().__init__(
            1002,
            f"Input amount {amount} is too small to produce any output",
            ErrorKind.INVALID_INPUT,
        )


class InvalidReservesError(QuoteError):
    def __init__(self, detail: str) -> None:
        super().__init__(1003, f"Invalid reserves: {detail}", ErrorKind.INVALID_INPUT)


class InvalidLevelError(QuoteError):
    def __init__(self, detail: str) -> None:
        super().__init__(1004, f"Invalid ladder level: {detail}", ErrorKind.INVALID_INPUT)


class InvalidFeeError(QuoteError):
    def __init__(self, fee_bps: float) -> None:
        super().__init__(
            1005,
            f"Fee must be in [0, 10000) bps, got {fee_bps}",
            ErrorKind.INVALID_INPUT,
        )


class InvalidDirectionError(QuoteError):
    def __init__(self, direction: object) -> None:
        super().__init__(
            1006,
            f"Direction must be A_TO_B or B_TO_A, got {direction!r}",
            ErrorKind.INVALID_INPUT,
        )


# --- 2xxx: Insufficient liquidity ---

class InsufficientLiquidityError(QuoteError):
    def __init__(
        self,
        detail: str = "Not enough liquidity for the requested amount",
        *,
        unfilled: float = 0.0,
        ladder: Any = None,
        code: int = 2001,
        kind: ErrorKind = ErrorKind.INSUFFICIENT_LIQUIDITY,
    ) -> None:
        # ladder: snapshot left behind by a walk that ran dry
        self.unfilled = unfilled
        self.ladder = ladder
        super().__init__(code, detail, kind)


# --- 3xxx: Degenerate state ---

class PoolDegenerateError(InsufficientLiquidityError):
    def __init__(self, reserve_in: int, reserve_out: int) -> None:
        super().__init__(
            f"Pool reserve would reach zero: reserve_in={reserve_in}, reserve_out={reserve_out}",
            code=3001,
            kind=ErrorKind.DEGENERATE_STATE,
        )


# --- 9xxx: Service ---

class UnknownVenueError(QuoteError):
    def __init__(self, venue_id: str) -> None:
        super().__init__(9001, f"Venue not found: {venue_id}", ErrorKind.UNKNOWN_VENUE)
