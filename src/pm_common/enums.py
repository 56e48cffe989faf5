"""Global enums shared by both quote engines."""

from enum import Enum


class SwapDirection(str, Enum):
    """A = base token, B = quote token."""
    A_TO_B = "A_TO_B"
    B_TO_A = "B_TO_A"


class LadderSide(str, Enum):
    BID = "BID"
    ASK = "ASK"


class ErrorKind(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    INSUFFICIENT_LIQUIDITY = "INSUFFICIENT_LIQUIDITY"
    DEGENERATE_STATE = "DEGENERATE_STATE"
    UNKNOWN_VENUE = "UNKNOWN_VENUE"


class VenueType(str, Enum):
    AMM = "AMM"
    LADDER = "LADDER"
