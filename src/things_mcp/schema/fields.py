"""Parameter schema nodes and the validator that walks them.

A tool's parameters are declared as a tree of :class:`Field` nodes.
:func:`validate` checks untrusted input against that tree, collects
every violation as a :class:`~things_mcp.core.errors.FieldIssue`, and
returns a fresh dict with defaults applied and unknown keys dropped.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from typing import Any

from things_mcp.core.errors import FieldIssue, ThingsValidationError


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _type_issue(expected: str, value: Any, path: str) -> FieldIssue:
    return FieldIssue(path, f"Expected {expected}, received {_type_name(value)}")


@dataclass(frozen=True, kw_only=True, slots=True)
class Field:
    """Base node. ``required`` only matters for object members."""

    description: str | None = None
    required: bool = True
    default: Any = MISSING

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    def check(self, value: Any, path: str, issues: list[FieldIssue]) -> Any:
        raise NotImplementedError


@dataclass(frozen=True, kw_only=True, slots=True)
class StringField(Field):
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    min_message: str | None = None
    max_message: str | None = None
    pattern_message: str | None = None

    def check(self, value: Any, path: str, issues: list[FieldIssue]) -> Any:
        if not isinstance(value, str):
            issues.append(_type_issue("string", value, path))
            return value
        if self.min_length is not None and len(value) < self.min_length:
            msg = self.min_message or (
                f"String must contain at least {self.min_length} character(s)"
            )
            issues.append(FieldIssue(path, msg))
        if self.max_length is not None and len(value) > self.max_length:
            msg = self.max_message or (
                f"String must contain at most {self.max_length} character(s)"
            )
            issues.append(FieldIssue(path, msg))
        if self.pattern is not None and not re.fullmatch(self.pattern, value):
            issues.append(FieldIssue(path, self.pattern_message or "Invalid format"))
        return value


@dataclass(frozen=True, kw_only=True, slots=True)
class NumberField(Field):
    minimum: float | None = None
    maximum: float | None = None
    integer: bool = False

    def check(self, value: Any, path: str, issues: list[FieldIssue]) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            issues.append(_type_issue("number", value, path))
            return value
        if self.integer:
            if isinstance(value, float) and not value.is_integer():
                issues.append(FieldIssue(path, "Expected integer, received float"))
                return value
            value = int(value)
        if self.minimum is not None and value < self.minimum:
            msg = f"Number must be greater than or equal to {self.minimum}"
            issues.append(FieldIssue(path, msg))
        if self.maximum is not None and value > self.maximum:
            msg = f"Number must be less than or equal to {self.maximum}"
            issues.append(FieldIssue(path, msg))
        return value


@dataclass(frozen=True, kw_only=True, slots=True)
class BooleanField(Field):
    def check(self, value: Any, path: str, issues: list[FieldIssue]) -> Any:
        if not isinstance(value, bool):
            issues.append(_type_issue("boolean", value, path))
        return value


@dataclass(frozen=True, kw_only=True, slots=True)
class LiteralField(Field):
    value: str | int | bool

    def check(self, value: Any, path: str, issues: list[FieldIssue]) -> Any:
        if value != self.value or type(value) is not type(self.value):
            issues.append(
                FieldIssue(path, f"Invalid literal value, expected {self.value!r}")
            )
        return value


@dataclass(frozen=True, kw_only=True, slots=True)
class EnumField(Field):
    values: tuple[str, ...]

    def check(self, value: Any, path: str, issues: list[FieldIssue]) -> Any:
        if value not in self.values or not isinstance(value, str):
            expected = " | ".join(repr(v) for v in self.values)
            issues.append(
                FieldIssue(
                    path,
                    f"Invalid enum value. Expected {expected}, received {value!r}",
                )
            )
        return value


@dataclass(frozen=True, kw_only=True, slots=True)
class ArrayField(Field):
    items: Field
    min_items: int | None = None
    max_items: int | None = None
    max_message: str | None = None

    def check(self, value: Any, path: str, issues: list[FieldIssue]) -> Any:
        if not isinstance(value, list):
            issues.append(_type_issue("array", value, path))
            return value
        if self.min_items is not None and len(value) < self.min_items:
            issues.append(
                FieldIssue(
                    path, f"Array must contain at least {self.min_items} element(s)"
                )
            )
        if self.max_items is not None and len(value) > self.max_items:
            msg = self.max_message or (
                f"Array must contain at most {self.max_items} element(s)"
            )
            issues.append(FieldIssue(path, msg))
        return [
            self.items.check(item, f"{path}[{i}]", issues)
            for i, item in enumerate(value)
        ]


@dataclass(frozen=True, kw_only=True, slots=True)
class UnionField(Field):
    """First matching branch wins.

    When nothing matches, ``message`` is reported if set; otherwise the
    issues of the first branch are.
    """

    options: tuple[Field, ...]
    message: str | None = None

    def check(self, value: Any, path: str, issues: list[FieldIssue]) -> Any:
        first: list[FieldIssue] | None = None
        for option in self.options:
            branch: list[FieldIssue] = []
            result = option.check(value, path, branch)
            if not branch:
                return result
            if first is None:
                first = branch
        if self.message is not None:
            issues.append(FieldIssue(path, self.message))
        elif first:
            issues.extend(first)
        return value


@dataclass(frozen=True, kw_only=True, slots=True)
class ObjectField(Field):
    """Named members plus an optional "at least one of" refinement.

    Unknown keys are dropped. ``None`` counts as absent.
    """

    fields: dict[str, Field]
    require_one_of: tuple[str, ...] = ()
    require_one_of_message: str | None = None

    def check(self, value: Any, path: str, issues: list[FieldIssue]) -> Any:
        if not isinstance(value, dict):
            issues.append(_type_issue("object", value, path))
            return value

        before = len(issues)
        result: dict[str, Any] = {}
        for name, member in self.fields.items():
            raw = value.get(name)
            if raw is None:
                if member.has_default:
                    result[name] = copy.deepcopy(member.default)
                elif member.required:
                    issues.append(FieldIssue(_join(path, name), "Required"))
                continue
            result[name] = member.check(raw, _join(path, name), issues)

        if self.require_one_of and len(issues) == before:
            if not any(result.get(name) for name in self.require_one_of):
                msg = self.require_one_of_message or (
                    "At least one of "
                    + ", ".join(self.require_one_of)
                    + " must be provided"
                )
                issues.append(FieldIssue(path, msg))
        return result


@dataclass(frozen=True, kw_only=True, slots=True)
class DiscriminatedUnionField(Field):
    """Objects selected by a literal tag, e.g. ``{"type": "todo", ...}``."""

    discriminator: str
    options: dict[str, ObjectField] = field(default_factory=dict)

    def check(self, value: Any, path: str, issues: list[FieldIssue]) -> Any:
        if not isinstance(value, dict):
            issues.append(_type_issue("object", value, path))
            return value
        tag = value.get(self.discriminator)
        option = self.options.get(tag) if isinstance(tag, str) else None
        if option is None:
            expected = " | ".join(repr(t) for t in self.options)
            issues.append(
                FieldIssue(
                    _join(path, self.discriminator),
                    f"Invalid discriminator value. Expected {expected}",
                )
            )
            return value
        return option.check(value, path, issues)


def validate(schema: Field, raw: Any) -> Any:
    """Validate *raw* against *schema* and return the coerced value.

    Raises:
        ThingsValidationError: Carrying one issue per violated constraint.
    """
    issues: list[FieldIssue] = []
    result = schema.check(raw, "", issues)
    if issues:
        raise ThingsValidationError(issues)
    return result
