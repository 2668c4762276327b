"""Shared schema types.

Invariants:
    - NonBlankStr values are stripped and never empty
    - Blank input fails with error type "blank" (reported like a missing field)
"""

from typing import Annotated

from pydantic import AfterValidator
from pydantic_core import PydanticCustomError


def strip_non_blank(v: str) -> str:
    v = v.strip()
    if not v:
        raise PydanticCustomError("blank", "value cannot be empty or whitespace")
    return v


NonBlankStr = Annotated[str, AfterValidator(strip_non_blank)]
