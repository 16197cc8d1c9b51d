"""Tests for schema nodes and the validator."""

from __future__ import annotations

from typing import Any

import pytest

from things_mcp.core.errors import ThingsValidationError
from things_mcp.schema import (
    ArrayField,
    BooleanField,
    DiscriminatedUnionField,
    EnumField,
    LiteralField,
    NumberField,
    ObjectField,
    StringField,
    UnionField,
    validate,
)


def _issues(schema: Any, raw: Any) -> list[str]:
    with pytest.raises(ThingsValidationError) as exc_info:
        validate(schema, raw)
    return [str(issue) for issue in exc_info.value.issues]


# ── Strings ──────────────────────────────────────────────────────


class TestStringField:
    def test_accepts(self) -> None:
        assert validate(StringField(), "hello") == "hello"

    def test_type_error(self) -> None:
        assert _issues(StringField(), 5) == ["Expected string, received number"]

    def test_length_bounds_default_messages(self) -> None:
        node = StringField(min_length=2, max_length=3)
        assert _issues(node, "a") == ["String must contain at least 2 character(s)"]
        assert _issues(node, "abcd") == ["String must contain at most 3 character(s)"]

    def test_custom_messages(self) -> None:
        node = StringField(
            min_length=1,
            max_length=2,
            min_message="Title is required",
            max_message="Title too long",
        )
        assert _issues(node, "") == ["Title is required"]
        assert _issues(node, "abc") == ["Title too long"]

    def test_pattern_is_full_match(self) -> None:
        node = StringField(pattern=r"\d{4}-\d{2}-\d{2}")
        assert validate(node, "2025-01-31") == "2025-01-31"
        assert _issues(node, "2025-01-31x") == ["Invalid format"]
        assert _issues(node, "2025-01-31\n") == ["Invalid format"]


# ── Numbers ──────────────────────────────────────────────────────


class TestNumberField:
    def test_integer_bounds(self) -> None:
        node = NumberField(integer=True, minimum=1, maximum=1000)
        assert validate(node, 50) == 50
        assert _issues(node, 0) == ["Number must be greater than or equal to 1"]
        assert _issues(node, 1001) == ["Number must be less than or equal to 1000"]

    def test_integral_float_coerced(self) -> None:
        result = validate(NumberField(integer=True), 5.0)
        assert result == 5
        assert isinstance(result, int)

    def test_fractional_float_rejected(self) -> None:
        assert _issues(NumberField(integer=True), 2.5) == [
            "Expected integer, received float"
        ]

    def test_bool_is_not_a_number(self) -> None:
        assert _issues(NumberField(), True) == ["Expected number, received boolean"]

    def test_string_is_not_a_number(self) -> None:
        assert _issues(NumberField(), "5") == ["Expected number, received string"]


# ── Scalars ──────────────────────────────────────────────────────


class TestScalars:
    def test_boolean(self) -> None:
        assert validate(BooleanField(), False) is False
        assert _issues(BooleanField(), "true") == ["Expected boolean, received string"]

    def test_literal(self) -> None:
        node = LiteralField(value="todo")
        assert validate(node, "todo") == "todo"
        assert _issues(node, "heading") == ["Invalid literal value, expected 'todo'"]

    def test_enum(self) -> None:
        node = EnumField(values=("today", "someday"))
        assert validate(node, "today") == "today"
        assert _issues(node, "never") == [
            "Invalid enum value. Expected 'today' | 'someday', received 'never'"
        ]


# ── Arrays ───────────────────────────────────────────────────────


class TestArrayField:
    def test_item_paths(self) -> None:
        node = ObjectField(
            fields={"tags": ArrayField(items=StringField(max_length=3))}
        )
        assert _issues(node, {"tags": ["ok", "toolong"]}) == [
            "tags[1]: String must contain at most 3 character(s)"
        ]

    def test_max_items_message(self) -> None:
        node = ArrayField(items=StringField(), max_items=1, max_message="Too many tags")
        assert _issues(node, ["a", "b"]) == ["Too many tags"]

    def test_min_items(self) -> None:
        node = ArrayField(items=StringField(), min_items=1)
        assert _issues(node, []) == ["Array must contain at least 1 element(s)"]

    def test_type_error(self) -> None:
        assert _issues(ArrayField(items=StringField()), "a,b") == [
            "Expected array, received string"
        ]


# ── Unions ───────────────────────────────────────────────────────


class TestUnionField:
    def test_first_matching_branch(self) -> None:
        node = UnionField(
            options=(EnumField(values=("today",)), StringField(pattern=r"\d{4}"))
        )
        assert validate(node, "today") == "today"
        assert validate(node, "2025") == "2025"

    def test_declared_message(self) -> None:
        node = UnionField(
            options=(EnumField(values=("today",)), StringField(pattern=r"\d{4}")),
            message="Invalid when value",
        )
        assert _issues(node, "later") == ["Invalid when value"]

    def test_first_branch_issues_without_message(self) -> None:
        node = UnionField(options=(BooleanField(), StringField()))
        assert _issues(node, 3) == ["Expected boolean, received number"]


# ── Objects ──────────────────────────────────────────────────────


class TestObjectField:
    def test_required_missing(self) -> None:
        node = ObjectField(fields={"title": StringField()})
        assert _issues(node, {}) == ["title: Required"]

    def test_none_counts_as_absent(self) -> None:
        node = ObjectField(fields={"notes": StringField(required=False)})
        assert validate(node, {"notes": None}) == {}

    def test_unknown_keys_dropped(self) -> None:
        node = ObjectField(fields={"title": StringField()})
        assert validate(node, {"title": "a", "evil": "x"}) == {"title": "a"}

    def test_default_applied_and_copied(self) -> None:
        node = ObjectField(fields={"tags": ArrayField(items=StringField(), default=[])})
        first = validate(node, {})
        first["tags"].append("mutated")
        assert validate(node, {}) == {"tags": []}

    def test_all_issues_collected(self) -> None:
        node = ObjectField(
            fields={"title": StringField(), "count": NumberField(required=False)}
        )
        assert _issues(node, {"count": "x"}) == [
            "title: Required",
            "count: Expected number, received string",
        ]

    def test_nested_paths(self) -> None:
        node = ObjectField(
            fields={
                "items": ArrayField(
                    items=ObjectField(fields={"title": StringField(min_length=1)})
                )
            }
        )
        assert _issues(node, {"items": [{"title": "a"}, {"title": ""}]}) == [
            "items[1].title: String must contain at least 1 character(s)"
        ]

    def test_require_one_of(self) -> None:
        node = ObjectField(
            fields={
                "id": StringField(required=False),
                "query": StringField(required=False),
            },
            require_one_of=("id", "query"),
            require_one_of_message="Either id or query must be provided",
        )
        assert validate(node, {"query": "today"}) == {"query": "today"}
        assert _issues(node, {}) == ["Either id or query must be provided"]
        assert _issues(node, {"id": ""}) == ["Either id or query must be provided"]

    def test_refinement_skipped_when_members_invalid(self) -> None:
        node = ObjectField(
            fields={"id": StringField(required=False)},
            require_one_of=("id",),
        )
        assert _issues(node, {"id": 5}) == ["id: Expected string, received number"]

    def test_top_level_type(self) -> None:
        node = ObjectField(fields={})
        assert _issues(node, []) == ["Expected object, received array"]


# ── Discriminated unions ─────────────────────────────────────────


class TestDiscriminatedUnion:
    NODE = DiscriminatedUnionField(
        discriminator="type",
        options={
            "todo": ObjectField(
                fields={"type": LiteralField(value="todo"), "title": StringField()}
            ),
            "heading": ObjectField(
                fields={
                    "type": LiteralField(value="heading"),
                    "title": StringField(),
                    "archived": BooleanField(default=False),
                }
            ),
        },
    )

    def test_selects_branch(self) -> None:
        assert validate(self.NODE, {"type": "heading", "title": "H"}) == {
            "type": "heading",
            "title": "H",
            "archived": False,
        }

    def test_bad_tag(self) -> None:
        assert _issues(self.NODE, {"type": "note", "title": "x"}) == [
            "type: Invalid discriminator value. Expected 'todo' | 'heading'"
        ]

    def test_branch_issues(self) -> None:
        assert _issues(self.NODE, {"type": "todo"}) == ["title: Required"]
