import random
from dataclasses import dataclass, field


@dataclass
class ExponentialBackoff:
    """
    Exponential retry delay with optional jitter.

    The server uses it to space out bind attempts when `bind_retries` is
    configured. Each call to `next_delay()` returns the current delay plus
    a random jitter in ``[0, jitter]``, then grows the current delay:

        current = min(current * factor, maximum)
    """

    initial: float = 0.5
    """Delay (in seconds) returned by the first call, before jitter."""

    maximum: float = 10.0
    """Upper bound (in seconds) of the delay, before jitter."""

    factor: float = 2.0

    jitter: float = 0.5

    _current: float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.initial <= 0 or self.factor < 1:
            raise ValueError("initial must be positive and factor at least 1")
        self._current = self.initial

    def next_delay(self) -> float:
        delay = self._current
        self._current = min(self._current * self.factor, self.maximum)

        if self.jitter > 0:
            delay += random.uniform(0, self.jitter)

        return delay

    def reset(self) -> None:
        """Start over from the initial delay, typically after a success."""
        self._current = self.initial
