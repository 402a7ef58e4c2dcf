"""
Gravity timing.

The game loop reports elapsed time; the timer says when the active piece is
due to fall one row. At most one drop is triggered per tick, however far
behind the clock is.
"""


class DropTimer:
    """
    Fall interval and drop counter, in milliseconds.

    Args:
        default_interval: Interval at the start of a game
        min_interval: Floor for the interval, also used while soft dropping
        step: Amount the interval shrinks on each acceleration
    """

    DEFAULT_INTERVAL = 1000
    MIN_INTERVAL = 50
    STEP = 10

    def __init__(
        self,
        default_interval: int = DEFAULT_INTERVAL,
        min_interval: int = MIN_INTERVAL,
        step: int = STEP,
    ):
        if min_interval <= 0 or default_interval < min_interval:
            raise ValueError(
                f"Need 0 < min_interval <= default_interval, got {min_interval} and {default_interval}"
            )
        self.default_interval = default_interval
        self.min_interval = min_interval
        self.step = step
        self.interval = default_interval
        self.soft_drop = False
        self.counter = 0.0

    @property
    def effective_interval(self) -> int:
        """Interval currently in force (soft drop overrides the base interval)."""
        return self.min_interval if self.soft_drop else self.interval

    def accelerate(self) -> None:
        """Shorten the base interval by one step, not going below the floor."""
        self.interval = max(self.min_interval, self.interval - self.step)

    def begin_soft_drop(self) -> None:
        self.soft_drop = True

    def end_soft_drop(self) -> None:
        self.soft_drop = False

    def tick(self, elapsed: float) -> bool:
        """
        Accumulate elapsed time.

        Returns:
            True if a drop is due (the counter is then reset)
        """
        self.counter += elapsed
        if self.counter >= self.effective_interval:
            self.counter = 0.0
            return True
        return False

    def reset(self) -> None:
        """Restore the starting interval and clear the counter."""
        self.interval = self.default_interval
        self.soft_drop = False
        self.counter = 0.0

    def __repr__(self) -> str:
        return f"DropTimer(interval={self.interval}, soft_drop={self.soft_drop})"
