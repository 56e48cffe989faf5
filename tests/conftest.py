"""Shared test fixtures."""

import pytest

from src.pm_amm.engine.constant_product import AmmEngine
from src.pm_ladder.domain.models import Ladder


@pytest.fixture
def amm() -> AmmEngine:
    """Pool with A=1000, B=20000 and a 50 bp fee."""
    return AmmEngine(1000, 20000, fee_bps=50)


@pytest.fixture
def sample_ladder() -> Ladder:
    """Three asks ascending, three bids descending."""
    return Ladder.from_pairs(
        asks=[(25, 10), (30, 5), (35, 2)],
        bids=[(20, 10), (15, 5), (10, 2)],
    )
