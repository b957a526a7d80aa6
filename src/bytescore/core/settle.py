"""Cosmetic digit-rolling convergence to a known total.

The settle phase never computes anything: it is fed the true, already-final
total and only animates a fixed-width display towards it. Cancelling it
stops the animation but the caller still gets the true total.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator, Callable

from bytescore.core.cancellation import CancellationToken

DEFAULT_WIDTH = 20


class DigitRoller:
    """Fixed-width decimal display that rolls one step per digit towards a target.

    Each step, a digit below its target digit increments by one and a digit
    above it snaps to the target. A display therefore converges within ten
    steps of a stable target.
    """

    def __init__(self, width: int = DEFAULT_WIDTH) -> None:
        if width <= 0:
            msg = "width must be positive"
            raise ValueError(msg)
        self.width: int = width
        self._digits: list[int] = [0] * width

    @property
    def value(self) -> int:
        """Return the number currently displayed."""
        return int("".join(str(d) for d in self._digits))

    @property
    def text(self) -> str:
        """Return the zero-padded display string."""
        return "".join(str(d) for d in self._digits)

    def reset(self) -> None:
        self._digits = [0] * self.width

    def is_settled(self, target: int) -> bool:
        """Return True if the display shows ``target`` exactly."""
        return self._digits == self._target_digits(target)

    def step_toward(self, target: int) -> int:
        """Advance every digit one step towards ``target``.

        Args:
            target: Non-negative number to converge on

        Returns:
            The newly displayed value
        """
        target_digits = self._target_digits(target)
        for i, (current, wanted) in enumerate(zip(self._digits, target_digits, strict=True)):
            if current < wanted:
                self._digits[i] = current + 1
            elif current > wanted:
                self._digits[i] = wanted
        return self.value

    def _target_digits(self, target: int) -> list[int]:
        if target < 0:
            msg = "target must be non-negative"
            raise ValueError(msg)
        text = str(target)
        if len(text) > self.width:
            # Grow to fit rather than truncate the most significant digits
            self._digits = [0] * (len(text) - self.width) + self._digits
            self.width = len(text)
        return [int(c) for c in text.rjust(self.width, "0")]


async def iter_settle(
    roller: DigitRoller,
    total: int,
    token: CancellationToken,
    *,
    step_delay: float = 0.0,
) -> AsyncGenerator[int]:
    """Yield intermediate display values until the roller shows ``total``.

    Stops immediately once the token is set, however far the convergence got.

    Args:
        roller: Display to animate, typically the one used while streaming
        total: True final total
        token: Cancellation token checked before every step
        step_delay: Seconds to wait between steps

    Yields:
        Successive displayed values, ending with ``total`` unless cancelled
    """
    while not roller.is_settled(total):
        if token.is_cancelled:
            return
        yield roller.step_toward(total)
        await asyncio.sleep(step_delay)


async def settle(
    roller: DigitRoller,
    total: int,
    token: CancellationToken,
    *,
    step_delay: float = 0.0,
    on_value: Callable[[int], None] | None = None,
) -> int:
    """Run the settle animation to the end and return the true total.

    Args:
        roller: Display to animate
        total: True final total
        token: Cancellation token checked before every step
        step_delay: Seconds to wait between steps
        on_value: Called with every intermediate display value

    Returns:
        ``total``, regardless of whether the animation was cancelled
    """
    async for value in iter_settle(roller, total, token, step_delay=step_delay):
        if on_value is not None:
            on_value(value)
    return total
