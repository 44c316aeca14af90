from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pysecureid.keyring import KeyRing

KEY_1 = "a" * 32
KEY_2 = "b" * 32


class FrozenClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def keyring() -> KeyRing:
    return KeyRing.from_mapping("1", {"1": KEY_1})


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2024, 1, 1, 12, 0, tzinfo=UTC))
