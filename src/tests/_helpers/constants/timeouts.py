"""Durations used by timing tests (seconds)."""


class TestTimeouts:
    """Budgets and operation lengths for real-clock tests.

    Margins are wide enough to absorb scheduler jitter on loaded CI machines.
    """

    __test__ = False

    SLOW_OPERATION = 0.3
    SHORT_BUDGET = 0.2
    LONG_BUDGET = 0.6
    TINY_BUDGET = 0.02
    POLL_INTERVAL = 0.01
    POLL_WAIT = 0.5
    BLOCKING_STEP = 0.15
    BLOCKING_TAIL = 0.1
    WARM_UP = 0.05
    WARM_UP_WAIT = 0.1


__all__ = [
    "TestTimeouts",
]
