"""Identifier and reference code generation."""

from __future__ import annotations

import random
import re
import time
import uuid
from collections.abc import Callable

IdFactory = Callable[[], str]

REFERENCE_PATTERN = re.compile(r"^(?P<prefix>[A-Z]+)-(?P<stamp>\d{6})-(?P<suffix>\d{3})$")


def new_id() -> str:
    """Random 32-character hex id."""
    return uuid.uuid4().hex


def generate_reference_id(
    prefix: str = "CMT",
    *,
    now_ms: int | None = None,
    rng: random.Random | None = None,
) -> str:
    """Build ``PREFIX-<last 6 digits of epoch ms>-<3 random digits>``.

    Uniqueness is probabilistic; callers treat the id as a label.
    """
    millis = now_ms if now_ms is not None else time.time_ns() // 1_000_000
    stamp = str(millis)[-6:].zfill(6)
    suffix = (rng or random).randint(0, 999)
    return f"{prefix}-{stamp}-{suffix:03d}"


def is_reference_id(value: str) -> bool:
    return REFERENCE_PATTERN.match(value) is not None
