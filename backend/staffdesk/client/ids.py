from __future__ import annotations

import random
import string
from datetime import datetime
from typing import Iterable, Optional

_BASE36 = string.digits + string.ascii_lowercase


def _initials(first_name: str, last_name: str, middle_name: Optional[str] = None) -> str:
    parts = [last_name, first_name]
    if middle_name:
        parts.append(middle_name)
    return "".join(part.strip()[:1].upper() for part in parts)


def _base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_employee_id(
    first_name: str,
    last_name: str,
    middle_name: Optional[str] = None,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """Build an id like ``EMP-240501-093015-IAM-07`` from the name and the clock."""
    now = now or datetime.now()
    rng = rng or random.Random()
    suffix = f"{rng.randrange(100):02d}"
    initials = _initials(first_name, last_name, middle_name)
    return f"EMP-{now:%y%m%d}-{now:%H%M%S}-{initials}-{suffix}"


def generate_simple_employee_id(
    first_name: str,
    last_name: str,
    middle_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    now = now or datetime.now()
    millis = int(now.timestamp() * 1000)
    return f"EMP-{_initials(first_name, last_name, middle_name)}-{_base36(millis)}"


def is_employee_id_unique(candidate: str, existing: Iterable[str]) -> bool:
    return candidate not in set(existing)
