"""Task payloads submitted by the crawling agent.

A task is either a rendered page to mirror (``parse``) or an already
downloaded asset to attach next to the page that referenced it
(``attach``). The ``task_type`` field discriminates the two on the wire.
"""
from __future__ import annotations

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from errors import (
    INVALID_FIELD,
    MISSING_FIELD,
    NO_TASK_TYPE,
    UNKNOWN_TASK_TYPE,
    TaskDeserializationError,
)


class ParseTask(BaseModel):
    """A rendered page: its URL plus the head and body markup."""

    model_config = ConfigDict(frozen=True)

    task_type: Literal["parse"] = "parse"
    url: str
    body: str
    head: str


class AttachTask(BaseModel):
    """A downloaded asset stored at ``file_path``, referenced from ``page_url``."""

    model_config = ConfigDict(frozen=True)

    task_type: Literal["attach"] = "attach"
    url: str
    file_path: str
    page_url: str


Task = Annotated[Union[ParseTask, AttachTask], Field(discriminator="task_type")]

_task_adapter = TypeAdapter(Task)


class TaskResult(BaseModel):
    """Assets still to fetch, and the page they must be attached to."""

    assets: List[str] = Field(default_factory=list)
    page_url: str


def _reason_for(error: ValidationError) -> str:
    error_types = {detail["type"] for detail in error.errors()}
    if "union_tag_not_found" in error_types:
        return NO_TASK_TYPE
    if "union_tag_invalid" in error_types:
        return UNKNOWN_TASK_TYPE
    if "missing" in error_types:
        return MISSING_FIELD
    return INVALID_FIELD


def parse_task(data) -> Union[ParseTask, AttachTask]:
    """Builds a task from a decoded JSON object or a raw JSON string/bytes."""
    try:
        if isinstance(data, (str, bytes, bytearray)):
            return _task_adapter.validate_json(data)
        return _task_adapter.validate_python(data)
    except ValidationError as e:
        reason = _reason_for(e)
        raise TaskDeserializationError(f"invalid task payload ({reason}): {e}", reason) from e


def dump_task(task) -> dict:
    """JSON-ready dict of a task, ``task_type`` included."""
    return task.model_dump(mode="json")
