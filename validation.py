"""Validators derived from SQLAlchemy table definitions.

The declarative models in ``users/model.py`` are the only place where
fields and their constraints are written down. This module turns a model's
columns into pydantic models:

- ``create_insert_schema`` - the shape needed to create a row. Columns with
  a default, a server default or a primary key may be omitted, nullable
  columns accept ``None``, everything else is required.
- ``create_select_schema`` - the full shape of a stored row. Every column is
  a required key, nullable columns accept ``None``.

Checks stop at type and length. Non-nullable strings must be non-empty,
nothing looks at the content (an email column takes any string).

``RecordValidator.validate`` never raises for bad input; the outcome is a
``ValidationResult`` carrying either the validated record or a
``ValidationFailure`` listing every offending field.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.sql.schema import Column


class IssueKind(str, Enum):
    MISSING_FIELD = "missing_field"
    LENGTH_VIOLATION = "length_violation"
    TYPE_VIOLATION = "type_violation"


_LENGTH_ERRORS = {"string_too_long", "string_too_short"}
_PAYLOAD_FIELD = "body"

# Unknown keys are dropped; ORM rows validate through their attributes
_MODEL_CONFIG = ConfigDict(from_attributes=True, extra="ignore")


@dataclass(frozen=True)
class FieldIssue:
    field: str
    kind: IssueKind
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "kind": self.kind.value, "message": self.message}


@dataclass(frozen=True)
class ValidationFailure:
    """Every problem found in one payload, in field declaration order."""

    schema: str
    issues: Tuple[FieldIssue, ...]

    @property
    def fields(self) -> List[str]:
        return [issue.field for issue in self.issues]

    @property
    def missing_fields(self) -> List[str]:
        return [issue.field for issue in self.issues if issue.kind is IssueKind.MISSING_FIELD]

    def to_response(self) -> Dict[str, Any]:
        return {
            "detail": "Validation error",
            "errors": [issue.to_dict() for issue in self.issues],
        }

    @classmethod
    def from_error(cls, schema: str, exc: ValidationError) -> "ValidationFailure":
        issues = []
        for error in exc.errors():
            if error["type"] == "missing":
                kind = IssueKind.MISSING_FIELD
            elif error["type"] in _LENGTH_ERRORS:
                kind = IssueKind.LENGTH_VIOLATION
            else:
                kind = IssueKind.TYPE_VIOLATION
            # A payload that is not an object fails as a whole
            location = ".".join(str(part) for part in error["loc"]) or _PAYLOAD_FIELD
            issues.append(FieldIssue(field=location, kind=kind, message=error["msg"]))
        return cls(schema=schema, issues=tuple(issues))


@dataclass(frozen=True)
class ValidationResult:
    record: Optional[BaseModel] = None
    failure: Optional[ValidationFailure] = None

    @property
    def success(self) -> bool:
        return self.failure is None

    @property
    def data(self) -> Optional[Dict[str, Any]]:
        if self.record is None:
            return None
        return self.record.model_dump()


class RecordValidator:
    """A derived pydantic model plus the result-returning ``validate``."""

    def __init__(self, model: Type[BaseModel]):
        self.model = model

    @property
    def name(self) -> str:
        return self.model.__name__

    @property
    def fields(self) -> List[str]:
        return list(self.model.model_fields)

    @property
    def required_fields(self) -> List[str]:
        return [name for name, info in self.model.model_fields.items() if info.is_required()]

    def validate(self, payload: Any) -> ValidationResult:
        try:
            record = self.model.model_validate(payload)
        except ValidationError as exc:
            return ValidationResult(failure=ValidationFailure.from_error(self.name, exc))
        return ValidationResult(record=record)

    def pick(self, *fields: str, name: Optional[str] = None) -> "RecordValidator":
        """Project onto ``fields``, keeping each field's definition as is."""
        unknown = [f for f in fields if f not in self.model.model_fields]
        if unknown:
            raise ValueError(f"{self.name} has no field(s): {', '.join(unknown)}")

        definitions = {}
        for field_name in fields:
            info = self.model.model_fields[field_name]
            definitions[field_name] = (info.annotation, info)
        model = create_model(
            name or f"{self.name}Pick",
            __config__=_MODEL_CONFIG,
            **definitions,
        )
        return RecordValidator(model)

    def __repr__(self) -> str:
        return f"<RecordValidator {self.name} fields={self.fields}>"


def _python_type(column: Column) -> Any:
    try:
        return column.type.python_type
    except NotImplementedError:
        return Any


def _constraints(column: Column) -> Dict[str, Any]:
    constraints: Dict[str, Any] = {}
    if _python_type(column) is str:
        length = getattr(column.type, "length", None)
        if length:
            constraints["max_length"] = length
        if not column.nullable:
            constraints["min_length"] = 1
    return constraints


def _is_generated(column: Column) -> bool:
    return column.primary_key or column.default is not None or column.server_default is not None


def _columns(model: type) -> List[Tuple[str, Column]]:
    mapper = sa_inspect(model)
    return [(attr.key, attr.columns[0]) for attr in mapper.column_attrs]


def _insert_field(column: Column) -> Tuple[Any, Any]:
    python_type = _python_type(column)
    constraints = _constraints(column)
    if column.nullable and not column.primary_key:
        return Optional[python_type], Field(default=None, **constraints)
    if _is_generated(column):
        # May be omitted, but an explicit null is still rejected
        return python_type, Field(default=None, **constraints)
    return python_type, Field(..., **constraints)


def _select_field(column: Column) -> Tuple[Any, Any]:
    python_type = _python_type(column)
    constraints = _constraints(column)
    if column.nullable and not column.primary_key:
        return Optional[python_type], Field(..., **constraints)
    return python_type, Field(..., **constraints)


def create_insert_schema(model: type, name: Optional[str] = None) -> RecordValidator:
    """Validator for the payload that creates a row of ``model``."""
    definitions = {key: _insert_field(column) for key, column in _columns(model)}
    pydantic_model = create_model(
        name or f"Insert{model.__name__}",
        __config__=_MODEL_CONFIG,
        **definitions,
    )
    return RecordValidator(pydantic_model)


def create_select_schema(model: type, name: Optional[str] = None) -> RecordValidator:
    """Validator for a stored row of ``model``."""
    definitions = {key: _select_field(column) for key, column in _columns(model)}
    pydantic_model = create_model(
        name or f"Select{model.__name__}",
        __config__=_MODEL_CONFIG,
        **definitions,
    )
    return RecordValidator(pydantic_model)
