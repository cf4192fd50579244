"""Tests for the StableSwap invariant solver."""

import pytest

from equilibrium.errors import InvalidAssetIndex, InvalidPoolState
from equilibrium.math.stable_math import MAX_ITERATIONS, calc_out_given_in, compute_d, compute_y

IMBALANCED_POOLS = [
    ([1_000_000, 2_500_000, 400_000], 200),
    ([1_500_000, 1_700_000, 1_300_000], 100),
    ([3_000_000, 1_000_000], 1_000),
    ([750_000, 1_250_000], 200),
]


class TestComputeD:
    """Tests for the invariant D."""

    @pytest.mark.parametrize("amplification", [1, 200, 5_000])
    def test_balanced_pool_equals_sum(self, amplification):
        """For equal reserves D is exactly the sum of reserves."""
        assert compute_d([1_000_000] * 3, amplification) == 3_000_000
        assert compute_d([1_000_000] * 2, amplification) == 2_000_000

    @pytest.mark.parametrize("reserves,amplification", IMBALANCED_POOLS)
    def test_imbalanced_pool_below_sum(self, reserves, amplification):
        """Imbalance lowers D below the sum but keeps it positive."""
        d = compute_d(reserves, amplification)
        assert 0 < d < sum(reserves)

    def test_higher_amplification_moves_d_toward_sum(self):
        """A flatter curve values an imbalanced pool closer to its sum."""
        reserves = [1_000_000, 2_500_000, 400_000]
        assert compute_d(reserves, 1) < compute_d(reserves, 200) < compute_d(reserves, 10_000)

    def test_repeated_calls_are_idempotent(self):
        """Two calls on the same reserves return identical values."""
        reserves = [1_234_567, 2_345_678, 987_654]
        assert compute_d(reserves, 200) == compute_d(reserves, 200)

    def test_large_reserves(self):
        """Reserves near the amount width still converge within the intermediate width."""
        reserves = [10**18, 10**18, 10**18]
        assert compute_d(reserves, 1_000) == 3 * 10**18

    def test_iteration_cap(self):
        """Iteration is capped."""
        assert MAX_ITERATIONS == 255

    @pytest.mark.parametrize(
        "reserves,amplification",
        [
            ([], 100),
            ([1_000_000], 100),
            ([1_000_000] * 4, 100),
            ([1_000_000, 0, 1_000_000], 100),
            ([1_000_000, 1_000_000], 0),
        ],
    )
    def test_degenerate_inputs_raise(self, reserves, amplification):
        """Degenerate inputs raise InvalidPoolState before iterating."""
        with pytest.raises(InvalidPoolState):
            compute_d(reserves, amplification)


class TestComputeY:
    """Tests for solving a single reserve against a target invariant."""

    @pytest.mark.parametrize("amplification", [1, 200, 5_000])
    def test_round_trip_balanced_is_exact(self, amplification):
        """compute_y on compute_d's output reconstructs each reserve exactly."""
        reserves = [1_000_000] * 3
        d = compute_d(reserves, amplification)
        for i in range(3):
            assert compute_y(reserves, i, amplification, d) == 1_000_000

    @pytest.mark.parametrize("reserves,amplification", IMBALANCED_POOLS)
    def test_round_trip_imbalanced_is_exact(self, reserves, amplification):
        """compute_y on compute_d's output reconstructs imbalanced reserves exactly."""
        d = compute_d(reserves, amplification)
        for i, reserve in enumerate(reserves):
            assert compute_y(reserves, i, amplification, d) == reserve

    @pytest.mark.parametrize("reserves,amplification", IMBALANCED_POOLS)
    def test_result_is_smallest_reaching_target(self, reserves, amplification):
        """One unit less than the solved reserve falls short of the target invariant."""
        d = compute_d(reserves, amplification)
        for i in range(len(reserves)):
            y = compute_y(reserves, i, amplification, d)
            below = list(reserves)
            below[i] = y - 1
            assert compute_d(below, amplification) < d

    def test_flat_invariant_returns_smallest_balance(self):
        """Where D does not move per unit of y, the smallest balance with the same D is returned."""
        reserves = [4_103_784, 3_791_592]
        d = compute_d(reserves, 1)
        y = compute_y(reserves, 0, 1, d)
        assert y == reserves[0] - 1
        assert compute_d([y, reserves[1]], 1) == d

    def test_entry_at_token_index_is_ignored(self):
        """The value at token_index does not affect the result."""
        d = compute_d([1_000_000] * 3, 200)
        assert compute_y([1_000_000, 1_000_000, 0], 2, 200, d) == 1_000_000
        assert compute_y([1_000_000, 1_000_000, 123], 2, 200, d) == 1_000_000

    def test_more_of_one_asset_means_less_of_another(self):
        """Raising another reserve lowers the solved reserve."""
        d = compute_d([1_000_000] * 3, 200)
        y = compute_y([1_100_000, 1_000_000, 1_000_000], 1, 200, d)
        assert y < 1_000_000

    def test_index_out_of_range(self):
        """token_index outside the pool raises InvalidAssetIndex."""
        with pytest.raises(InvalidAssetIndex):
            compute_y([1_000_000] * 3, 3, 200, 3_000_000)
        with pytest.raises(InvalidAssetIndex):
            compute_y([1_000_000] * 3, -1, 200, 3_000_000)

    def test_zero_target_raises(self):
        """A zero target invariant raises InvalidPoolState."""
        with pytest.raises(InvalidPoolState):
            compute_y([1_000_000] * 3, 0, 200, 0)

    def test_zero_other_reserve_raises(self):
        """A zero reserve among the used entries raises InvalidPoolState."""
        with pytest.raises(InvalidPoolState):
            compute_y([1_000_000, 0, 1_000_000], 0, 200, 3_000_000)


class TestCalcOutGivenIn:
    """Tests for the pure curve payout."""

    def test_small_trade_near_par(self):
        """Near balance a high-A pool pays close to 1:1."""
        amount_out, new_reserve = calc_out_given_in([1_000_000] * 3, 200, 0, 1, 1_000)
        assert 990 <= amount_out <= 1_000
        assert new_reserve == 1_000_000 - amount_out

    def test_larger_trade_pays_more(self):
        """Payout is monotonic in the input."""
        small, _ = calc_out_given_in([1_000_000] * 3, 200, 0, 1, 10_000)
        large, _ = calc_out_given_in([1_000_000] * 3, 200, 0, 1, 100_000)
        assert large > small

    def test_amplification_reduces_slippage(self):
        """A higher A pays more for the same large trade."""
        low, _ = calc_out_given_in([1_000_000] * 3, 1, 0, 1, 300_000)
        high, _ = calc_out_given_in([1_000_000] * 3, 1_000, 0, 1, 300_000)
        assert high > low

    def test_payout_below_input_for_balanced_pool(self):
        """Trading away from balance never pays more than it takes."""
        amount_out, _ = calc_out_given_in([1_500_000] * 3, 200, 0, 1, 199_000)
        assert 198_900 < amount_out < 199_000

    def test_invariant_does_not_decrease_with_retained_fee(self):
        """Keeping the fee in the input reserve raises the invariant."""
        reserves = [1_000_000, 2_500_000, 400_000]
        amount_after_fee = 49_975
        _, new_reserve_out = calc_out_given_in(reserves, 200, 2, 0, amount_after_fee)
        after = [new_reserve_out, reserves[1], reserves[2] + 50_000]
        assert compute_d(after, 200) > compute_d(reserves, 200)

    @pytest.mark.parametrize("reserves,amplification", IMBALANCED_POOLS)
    @pytest.mark.parametrize("amount_in", [1, 1_000, 250_000])
    def test_invariant_never_decreases_without_fee(self, reserves, amplification, amount_in):
        """Even with no fee retained, rounding keeps D from falling in either direction."""
        d = compute_d(reserves, amplification)
        for i, j in [(0, 1), (1, 0)]:
            amount_out, new_reserve_out = calc_out_given_in(reserves, amplification, i, j, amount_in)
            after = list(reserves)
            after[i] += amount_in
            after[j] = new_reserve_out
            assert amount_out > 0
            assert compute_d(after, amplification) >= d

    def test_one_unit_never_pays_two(self):
        """A one-unit input from the scarce asset pays at most one unit."""
        amount_out, _ = calc_out_given_in([1_000_000, 2_000_000, 1_000_000], 200, 0, 1, 1)
        assert amount_out <= 1

    def test_index_out_of_range(self):
        """Out-of-range indices raise InvalidAssetIndex."""
        with pytest.raises(InvalidAssetIndex):
            calc_out_given_in([1_000_000] * 2, 200, 0, 2, 1_000)
