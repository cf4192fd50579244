"""Tests for the weighted dynamic fee model."""

import pytest

from equilibrium.errors import InvalidInputLength
from equilibrium.fees import (
    BASE_FEE_BPS,
    DEFAULT_FEE_CONFIG,
    MAX_FEE_BPS,
    FeeConfig,
    current_weights,
    dynamic_fee_bps,
    quote_fee,
    weight_deviation,
)


class TestFeeConfig:
    """Tests for fee bounds."""

    def test_defaults(self):
        """Default bounds are 5 and 50 bps."""
        assert BASE_FEE_BPS == 5
        assert MAX_FEE_BPS == 50
        assert DEFAULT_FEE_CONFIG == FeeConfig(5, 50)

    def test_base_above_max_rejected(self):
        """base_fee_bps may not exceed max_fee_bps."""
        with pytest.raises(ValueError):
            FeeConfig(base_fee_bps=60, max_fee_bps=50)

    def test_max_above_denominator_rejected(self):
        """Fees cannot exceed 100%."""
        with pytest.raises(ValueError):
            FeeConfig(base_fee_bps=5, max_fee_bps=10_001)

    def test_negative_rejected(self):
        """Negative bounds are rejected."""
        with pytest.raises(ValueError):
            FeeConfig(base_fee_bps=-1, max_fee_bps=50)


class TestCurrentWeights:
    """Tests for current reserve weights."""

    def test_exact_weights(self):
        """Weights are reserve / sum in bps."""
        assert current_weights([450_000, 350_000, 200_000]) == [4_500, 3_500, 2_000]

    def test_weights_round_down(self):
        """Each weight rounds down independently."""
        assert current_weights([1, 1, 1]) == [3_333, 3_333, 3_333]

    def test_empty_pool(self):
        """An all-zero pool has all-zero weights."""
        assert current_weights([0, 0, 0]) == [0, 0, 0]


class TestWeightDeviation:
    """Tests for total weight deviation."""

    def test_sum_of_absolute_differences(self):
        """Deviation sums |current - target| without averaging."""
        assert weight_deviation([3_333, 3_333, 3_333], [4_500, 3_500, 2_000]) == 1_167 + 167 + 1_333

    def test_zero_on_target(self):
        """A pool on target has zero deviation."""
        assert weight_deviation([5_000, 5_000], [5_000, 5_000]) == 0

    def test_length_mismatch(self):
        """Mismatched lengths raise InvalidInputLength."""
        with pytest.raises(InvalidInputLength):
            weight_deviation([5_000, 5_000], [4_500, 3_500, 2_000])

    def test_not_averaged_over_asset_count(self):
        """A 100 bps shift between two assets counts 200 bps in either pool kind."""
        two = weight_deviation([5_100, 4_900], [5_000, 5_000])
        three = weight_deviation([3_433, 3_233, 3_334], [3_333, 3_333, 3_334])
        assert two == three == 200


class TestDynamicFee:
    """Tests for fee = min(base + deviation, max)."""

    def test_zero_deviation_charges_base_fee(self):
        """On target the fee is exactly base_fee."""
        fee, deviation = dynamic_fee_bps([450_000, 350_000, 200_000], [4_500, 3_500, 2_000])
        assert deviation == 0
        assert fee == BASE_FEE_BPS

    def test_small_deviation_adds_to_base(self):
        """Below the cap the deviation is added to the base fee."""
        fee, deviation = dynamic_fee_bps([5_022, 4_978], [5_000, 5_000])
        assert deviation == 44
        assert fee == 49

    def test_deviation_beyond_headroom_clamps_to_max(self):
        """Once deviation exceeds max - base the fee is exactly max_fee."""
        fee, deviation = dynamic_fee_bps([5_023, 4_977], [5_000, 5_000])
        assert deviation == 46
        assert fee == MAX_FEE_BPS

    def test_large_deviation_clamps_to_max(self):
        """Far-off-target pools pay the cap."""
        fee, _ = dynamic_fee_bps([1_000_000, 1_000_000, 1_000_000], [4_500, 3_500, 2_000])
        assert fee == MAX_FEE_BPS

    def test_custom_bounds(self):
        """Bounds come from the FeeConfig passed in."""
        config = FeeConfig(base_fee_bps=10, max_fee_bps=100)
        assert dynamic_fee_bps([5_000, 5_000], [5_000, 5_000], config) == (10, 0)
        assert dynamic_fee_bps([1_000_000, 1_000_000, 1_000_000], [4_500, 3_500, 2_000], config)[0] == 100


class TestQuoteFee:
    """Tests for splitting an input into fee and remainder."""

    def test_fee_rounds_up(self):
        """The fee is rounded up so rounding never favors the trader."""
        quote = quote_fee([1_000_000, 1_000_000], [5_000, 5_000], 1_001)
        # 1001 * 5 / 10000 = 0.5005
        assert quote.fee_bps == 5
        assert quote.fee_amount == 1
        assert quote.amount_after_fee == 1_000

    def test_split_adds_up(self):
        """fee_amount + amount_after_fee == amount_in."""
        quote = quote_fee([1_500_000] * 3, [4_500, 3_500, 2_000], 200_000)
        assert quote.fee_bps == 50
        assert quote.deviation_bps == 2_667
        assert quote.fee_amount == 1_000
        assert quote.amount_after_fee == 199_000

    def test_zero_input(self):
        """A zero input has a zero fee."""
        quote = quote_fee([1_000_000, 1_000_000], [5_000, 5_000], 0)
        assert quote.fee_amount == 0
        assert quote.amount_after_fee == 0
