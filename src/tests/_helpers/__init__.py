"""Test helpers package.

Shared fakes and subject factories for the fluent-assertions suite.
"""

from .constants import TestTimeouts
from .fake_clock import FakeClock, FakeTimer
from .subjects import (
    BlockingSubject,
    CountingSubject,
    FlakySubject,
    GatedSubject,
    RecoveringSubject,
    SyncRaisingSubject,
    pending_forever,
    settle,
    with_blocking_body,
    with_sync_prefix,
)

__all__ = [
    "BlockingSubject",
    "CountingSubject",
    "FakeClock",
    "FakeTimer",
    "FlakySubject",
    "GatedSubject",
    "RecoveringSubject",
    "SyncRaisingSubject",
    "TestTimeouts",
    "pending_forever",
    "settle",
    "with_blocking_body",
    "with_sync_prefix",
]
