import pytest

from src.pm_amm.engine.constant_product import AmmEngine
from src.pm_common.enums import SwapDirection
from src.pm_common.errors import (
    InsufficientLiquidityError,
    InvalidDirectionError,
    InvalidFeeError,
    InvalidInputError,
    InvalidReservesError,
    OutputTooSmallError,
    PoolDegenerateError,
)

A_TO_B = SwapDirection.A_TO_B
B_TO_A = SwapDirection.B_TO_A


def _pool(a: int = 1000, b: int = 20000, fee: int = 50) -> AmmEngine:
    return AmmEngine(a, b, fee_bps=fee)


class TestConstruction:
    def test_k_is_derived(self) -> None:
        assert _pool().k == 20_000_000

    def test_default_fee_from_settings(self) -> None:
        assert AmmEngine(10, 10).fee_bps == 50

    def test_zero_reserves_allowed(self) -> None:
        pool = AmmEngine(0, 0)
        assert pool.k == 0

    def test_negative_reserve_raises(self) -> None:
        with pytest.raises(InvalidReservesError, match=r"non-negative"):
            AmmEngine(-1, 100)

    def test_float_reserve_raises(self) -> None:
        with pytest.raises(InvalidReservesError):
            AmmEngine(10.5, 100)  # type: ignore[arg-type]

    def test_fee_out_of_range_raises(self) -> None:
        with pytest.raises(InvalidFeeError):
            AmmEngine(100, 100, fee_bps=10_000)


class TestQuoteAToB:
    def test_scenario_output_and_reserves(self, amm: AmmEngine) -> None:
        # effective = 10 * 9950 // 10000 = 9; B' = 20_000_000 // 1009 = 19821
        q = amm.quote(10, A_TO_B)
        assert q.in_amount == 10
        assert q.fee_amount == 1
        assert q.out_amount == 20000 - 19821 - 1
        assert (amm.reserve_in, amm.reserve_out) == (1009, 19821)

    def test_scenario_price_impact(self, amm: AmmEngine) -> None:
        # |1009/19821 - 0.05| / 0.05 ≈ 1.81%
        q = amm.quote(10, A_TO_B)
        assert q.price_impact_bps == 181

    def test_invariant_never_exceeds_k(self, amm: AmmEngine) -> None:
        k = amm.k
        amm.quote(10, A_TO_B)
        assert amm.reserve_in * amm.reserve_out <= k

    def test_k_follows_reserves(self, amm: AmmEngine) -> None:
        amm.quote(10, A_TO_B)
        assert amm.k == 1009 * 19821


class TestQuoteBToA:
    def test_follow_up_swap_uses_updated_reserves(self, amm: AmmEngine) -> None:
        amm.quote(10, A_TO_B)
        # effective = 497; A' = (1009 * 19821) // 20318 = 984
        q = amm.quote(500, B_TO_A)
        assert q.out_amount == 1009 - 984 - 1
        assert (amm.reserve_in, amm.reserve_out) == (984, 20318)
        assert 500 < q.price_impact_bps < 520

    def test_impact_positive(self) -> None:
        q = _pool().quote(1000, B_TO_A)
        assert q.price_impact_bps > 0


class TestInvariantProperty:
    @pytest.mark.parametrize("direction", [A_TO_B, B_TO_A])
    @pytest.mark.parametrize("amount", [17, 250, 999, 5000, 123_456])
    def test_product_bounded_below_k(self, direction: SwapDirection, amount: int) -> None:
        pool = _pool(1_000_000, 3_000_000, fee=30)
        k = pool.k
        pool.quote(amount, direction)
        product = pool.reserve_in * pool.reserve_out
        grown = pool.reserve_in if direction == A_TO_B else pool.reserve_out
        assert product <= k
        # floor division leaves less than one unit of the grown reserve
        assert k - product < grown


class TestFeeMonotonicity:
    def test_output_decreases_as_fee_increases(self) -> None:
        outs = [
            AmmEngine(100_000, 100_000, fee_bps=fee).quote(1000, A_TO_B).out_amount
            for fee in [0, 30, 100, 500]
        ]
        assert outs == sorted(outs, reverse=True)
        assert len(set(outs)) == len(outs)

    def test_fee_output_not_above_zero_fee(self) -> None:
        for amount in [50, 500, 5000]:
            free = _pool(fee=0).preview(amount, B_TO_A).out_amount
            paid = _pool(fee=50).preview(amount, B_TO_A).out_amount
            assert paid <= free


class TestRejections:
    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_input(self, amm: AmmEngine, amount: int) -> None:
        with pytest.raises(InvalidInputError):
            amm.quote(amount, A_TO_B)
        assert (amm.reserve_in, amm.reserve_out) == (1000, 20000)

    def test_repeated_failure_is_idempotent(self, amm: AmmEngine) -> None:
        codes = []
        for _ in range(3):
            with pytest.raises(InvalidInputError) as exc:
                amm.quote(0, B_TO_A)
            codes.append(exc.value.code)
        assert codes == [1001, 1001, 1001]
        assert amm.reserves.reserve_in == 1000
        assert amm.reserves.reserve_out == 20000

    def test_non_integer_amount(self, amm: AmmEngine) -> None:
        with pytest.raises(InvalidInputError, match=r"integer"):
            amm.quote(10.5, A_TO_B)  # type: ignore[arg-type]

    def test_bool_amount(self, amm: AmmEngine) -> None:
        with pytest.raises(InvalidInputError):
            amm.quote(True, A_TO_B)

    def test_output_too_small(self, amm: AmmEngine) -> None:
        # effective input truncates to 0 → output would be -1
        with pytest.raises(OutputTooSmallError):
            amm.quote(1, A_TO_B)
        assert amm.reserve_in == 1000

    def test_degenerate_pool(self) -> None:
        pool = _pool(1, 1, fee=0)
        with pytest.raises(PoolDegenerateError):
            pool.quote(10, A_TO_B)
        assert (pool.reserve_in, pool.reserve_out) == (1, 1)

    def test_degenerate_is_liquidity_error(self) -> None:
        pool = _pool(0, 500, fee=0)
        with pytest.raises(InsufficientLiquidityError):
            pool.quote(10, B_TO_A)

    @pytest.mark.parametrize("direction", ["sideways", None, "a_to_b"])
    def test_unknown_direction(self, amm: AmmEngine, direction: object) -> None:
        with pytest.raises(InvalidDirectionError):
            amm.quote(10, direction)  # type: ignore[arg-type]
        assert (amm.reserve_in, amm.reserve_out) == (1000, 20000)

    def test_direction_string_is_accepted(self, amm: AmmEngine) -> None:
        assert amm.preview(10, "A_TO_B").out_amount == 178  # type: ignore[arg-type]


class TestPreviewAndSpotPrice:
    def test_preview_does_not_mutate(self, amm: AmmEngine) -> None:
        preview = amm.preview(10, A_TO_B)
        assert (amm.reserve_in, amm.reserve_out) == (1000, 20000)
        assert amm.quote(10, A_TO_B) == preview

    def test_spot_price_orientation(self, amm: AmmEngine) -> None:
        assert amm.spot_price(A_TO_B) == pytest.approx(0.05)
        assert amm.spot_price(B_TO_A) == pytest.approx(20.0)

    def test_spot_price_empty_pool(self) -> None:
        with pytest.raises(PoolDegenerateError):
            AmmEngine(0, 100).spot_price(A_TO_B)

    def test_spot_price_unknown_direction(self, amm: AmmEngine) -> None:
        with pytest.raises(InvalidDirectionError):
            amm.spot_price("up")  # type: ignore[arg-type]
