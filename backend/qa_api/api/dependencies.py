"""Request Dependencies — id parsing, JSON decoding, body validation, store lookup.

Invariants:
    - Path ids are parsed before the body is read and before storage is touched
    - Malformed JSON, empty bodies and non-object bodies all fail with
      "invalid json body"
    - Missing and blank fields are reported together, in model field order
    - Storage failures keep their cause for the log and get a per-operation
      client message

Design Decisions:
    - Ids declared as str path params and parsed here (not int path params):
      FastAPI's own int coercion would accept "0", "-3" and "+7"
    - Body read by a dependency rather than a Body() param: FastAPI decodes
      Body() params before any dependency runs, which would put JSON errors
      ahead of id errors
"""

import json
from contextlib import contextmanager
from typing import Any, Iterator, TypeVar

from fastapi import Path, Request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from qa_api.core.domain_types import QuestionId, AnswerId, parse_id
from qa_api.core.errors import PersistenceError, ValidationError
from qa_api.core.repository_protocols import QARepository
from qa_api.infrastructure.database import DatabaseSessionManager


M = TypeVar("M", bound=BaseModel)

_REQUIRED_ERROR_TYPES = {"missing", "string_type", "blank"}


def get_store(request: Request) -> QARepository:
    """FastAPI dependency — the QAStorage built during lifespan startup."""
    return request.app.state.store


def get_db_manager(request: Request) -> DatabaseSessionManager:
    return request.app.state.db


def question_id_path(question_id: str = Path()) -> QuestionId:
    return QuestionId(parse_id(question_id, "question"))


def answer_id_path(answer_id: str = Path()) -> AnswerId:
    return AnswerId(parse_id(answer_id, "answer"))


async def read_json_body(request: Request) -> dict[str, Any]:
    """Decode the request body as a JSON object."""
    raw = await request.body()
    try:
        payload = json.loads(raw)
    except ValueError:
        raise ValidationError("invalid json body")
    if not isinstance(payload, dict):
        raise ValidationError("invalid json body")
    return payload


def validate_body(model: type[M], payload: dict[str, Any]) -> M:
    """Validate payload against model, mapping errors to one client message."""
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(_describe_errors(model, exc.errors())) from exc


def _describe_errors(model: type[BaseModel], errors: list[dict]) -> str:
    failed = {
        str(e["loc"][0]) for e in errors
        if e["loc"] and e["type"] in _REQUIRED_ERROR_TYPES
    }
    missing = [name for name in model.model_fields if name in failed]
    if len(missing) == 1:
        return f"{missing[0]} is required"
    if missing:
        return f"{' and '.join(missing)} are required"
    return errors[0]["msg"]


@contextmanager
def reported_as(failure_message: str) -> Iterator[None]:
    """Give any PersistenceError raised inside a client-facing message.

    NotFoundError and ValidationError pass through untouched.
    """
    try:
        yield
    except PersistenceError as e:
        e.public_message = failure_message
        raise
