"""Domain Types — identity types for questions and answers.

Invariants:
    - QuestionId and AnswerId wrap positive ints assigned by the database
    - parse_id() is the only way a path segment becomes an identifier
    - Every id parse_id() returns fits a signed 64-bit column

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - parse_id rejects signs and non-ASCII digits so "+1" and "١" never reach
      storage; surrounding whitespace is already stripped by path normalisation
"""

import re
from typing import NewType

from qa_api.core.errors import ValidationError


# ─── Identity Types ──────────────────────────────────────────────

QuestionId = NewType("QuestionId", int)
AnswerId = NewType("AnswerId", int)

MAX_ID = 2**63 - 1

_DIGITS = re.compile(r"[0-9]+")


def parse_id(raw: str, resource: str) -> int:
    """Parse a path segment into a positive integer id.

    Raises ValidationError("invalid <resource> id") for anything else,
    including values past MAX_ID.
    """
    if not _DIGITS.fullmatch(raw) or len(raw.lstrip("0")) > len(str(MAX_ID)):
        raise ValidationError(f"invalid {resource} id", field=f"{resource}_id")
    value = int(raw)
    if value <= 0 or value > MAX_ID:
        raise ValidationError(f"invalid {resource} id", field=f"{resource}_id")
    return value
