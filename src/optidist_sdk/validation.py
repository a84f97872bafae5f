from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, TypeVar

from pydantic import ValidationError as PydanticValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class ValidationIssue:
    row_index: int | None
    field: str
    reason: str


class ClientValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue], summary: str | None = None) -> None:
        self.issues = issues
        self.summary = summary
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.summary:
            return self.summary
        if not self.issues:
            return "Validation failed"
        issue = self.issues[0]
        location = f"row {issue.row_index}" if issue.row_index is not None else "payload"
        return f"{location} {issue.field}: {issue.reason}"


def coerce_model(value: T | Mapping[str, Any], model_type: type[T], row_index: int | None = None) -> T:
    if isinstance(value, model_type):
        return value
    try:
        return model_type.model_validate(value)
    except PydanticValidationError as exc:
        issue = exc.errors()[0] if exc.errors() else {"loc": ("payload",), "msg": "Invalid payload"}
        field = ".".join(str(part) for part in issue.get("loc", ("payload",)))
        raise_issue(row_index, field, issue.get("msg", "Invalid payload"))
        raise


def raise_issue(row_index: int | None, field: str, reason: str) -> None:
    raise ClientValidationError([ValidationIssue(row_index=row_index, field=field, reason=reason)])
