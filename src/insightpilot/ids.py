"""
Id and clock providers for generated insights, alerts and summaries.

Agents never call the wall clock or the random module directly; they go
through an :class:`IdFactory` so tests can pin ids and timestamps.
"""

from __future__ import annotations

import itertools
import random
import string
from datetime import datetime, timezone

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


class IdFactory:
    """Default provider: ``{prefix}-{epoch_ms}-{random suffix}`` ids, UTC clock."""

    suffix_length: int = 9

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def new_id(self, prefix: str) -> str:
        millis = int(self.now().timestamp() * 1000)
        suffix = "".join(self._rng.choice(_SUFFIX_ALPHABET) for _ in range(self.suffix_length))
        return f"{prefix}-{millis}-{suffix}"


class SequentialIdFactory(IdFactory):
    """Deterministic provider: ``{prefix}-1``, ``{prefix}-2``... and a fixed clock.

    The counter is shared across prefixes, so ids stay unique within one
    factory even when different agents use the same prefix.
    """

    def __init__(self, timestamp: datetime | None = None) -> None:
        super().__init__()
        self._timestamp = timestamp or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self._counter = itertools.count(1)

    def now(self) -> datetime:
        return self._timestamp

    def new_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._counter)}"
