"""Unit tests for the digit-rolling settle phase."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from bytescore.core.cancellation import CancellationToken
from bytescore.core.settle import DEFAULT_WIDTH, DigitRoller, iter_settle, settle


@pytest.mark.unit
class TestDigitRoller:
    """Test DigitRoller stepping rules."""

    def test_starts_at_zero(self) -> None:
        """A new roller shows zero padded to its width."""
        roller = DigitRoller()

        assert roller.value == 0
        assert roller.text == "0" * DEFAULT_WIDTH

    def test_rejects_non_positive_width(self) -> None:
        """Width must be positive."""
        with pytest.raises(ValueError, match="width"):
            _ = DigitRoller(0)

    def test_lower_digits_increment_by_one(self) -> None:
        """Digits below their target move up one per step."""
        roller = DigitRoller(3)

        assert roller.step_toward(352) == 111
        assert roller.step_toward(352) == 222
        assert roller.step_toward(352) == 332

    def test_higher_digits_snap_down(self) -> None:
        """Digits above their target jump straight to it."""
        roller = DigitRoller(3)
        for _ in range(9):
            _ = roller.step_toward(999)

        assert roller.step_toward(105) == 105

    def test_settles_within_ten_steps(self) -> None:
        """Any target is reached in at most ten steps from zero."""
        roller = DigitRoller(4)
        steps = 0
        while not roller.is_settled(9081):
            _ = roller.step_toward(9081)
            steps += 1

        assert steps == 9
        assert roller.value == 9081

    def test_grows_for_wide_targets(self) -> None:
        """Targets wider than the display widen it instead of truncating."""
        roller = DigitRoller(2)

        while not roller.is_settled(12345):
            _ = roller.step_toward(12345)

        assert roller.width == 5
        assert roller.text == "12345"

    def test_rejects_negative_target(self) -> None:
        """Negative targets are invalid."""
        with pytest.raises(ValueError, match="non-negative"):
            _ = DigitRoller().step_toward(-1)

    def test_reset(self) -> None:
        """reset returns the display to zero."""
        roller = DigitRoller(3)
        _ = roller.step_toward(555)

        roller.reset()

        assert roller.value == 0

    @given(target=st.integers(min_value=0, max_value=10**20 - 1))
    def test_always_converges(self, target: int) -> None:
        """Stepping towards a fixed target always reaches it within ten steps."""
        roller = DigitRoller()

        for _ in range(10):
            if roller.is_settled(target):
                break
            _ = roller.step_toward(target)

        assert roller.value == target

    @given(
        first=st.integers(min_value=0, max_value=10**12),
        second=st.integers(min_value=0, max_value=10**12),
    )
    def test_converges_after_target_change(self, first: int, second: int) -> None:
        """A roller part-way to one target still converges to another."""
        roller = DigitRoller(13)
        for _ in range(4):
            _ = roller.step_toward(first)

        for _ in range(10):
            _ = roller.step_toward(second)

        assert roller.value == second


@pytest.mark.unit
class TestSettle:
    """Test the async settle drivers."""

    @pytest.mark.asyncio
    async def test_settle_reaches_total(self) -> None:
        """The animation ends on the exact total."""
        roller = DigitRoller(6)
        values: list[int] = []

        result = await settle(roller, 123456, CancellationToken(), on_value=values.append)

        assert result == 123456
        assert values[-1] == 123456
        assert roller.value == 123456
        assert len(values) <= 10

    @pytest.mark.asyncio
    async def test_already_settled_yields_nothing(self) -> None:
        """A roller already showing the total produces no steps."""
        roller = DigitRoller(3)

        values = [v async for v in iter_settle(roller, 0, CancellationToken())]

        assert values == []

    @pytest.mark.asyncio
    async def test_cancelled_settle_returns_true_total(self) -> None:
        """Cancelling skips the animation but keeps the real total."""
        roller = DigitRoller(6)
        token = CancellationToken()
        token.cancel()
        values: list[int] = []

        result = await settle(roller, 987654, token, on_value=values.append)

        assert result == 987654
        assert values == []
        assert roller.value == 0

    @pytest.mark.asyncio
    async def test_cancel_mid_animation(self) -> None:
        """Cancelling part-way stops further steps."""
        roller = DigitRoller(4)
        token = CancellationToken()
        values: list[int] = []

        def record(value: int) -> None:
            values.append(value)
            if len(values) == 2:
                token.cancel()

        result = await settle(roller, 9999, token, on_value=record)

        assert result == 9999
        assert values == [1111, 2222]
