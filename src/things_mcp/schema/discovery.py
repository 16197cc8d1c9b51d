"""Render a :class:`Field` tree as a JSON-Schema-like discovery document.

Each node kind has one entry in ``_DESCRIBERS``. A node kind with no
entry is rendered as an untyped string so discovery never fails.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from things_mcp.schema.fields import (
    ArrayField,
    BooleanField,
    DiscriminatedUnionField,
    EnumField,
    Field,
    LiteralField,
    NumberField,
    ObjectField,
    StringField,
    UnionField,
)

if TYPE_CHECKING:
    from collections.abc import Callable

_JSON_TYPES: dict[type, str] = {bool: "boolean", int: "number", str: "string"}


def _string(node: StringField) -> dict[str, Any]:
    out: dict[str, Any] = {"type": "string"}
    if node.min_length is not None:
        out["minLength"] = node.min_length
    if node.max_length is not None:
        out["maxLength"] = node.max_length
    if node.pattern is not None:
        out["pattern"] = node.pattern
    return out


def _number(node: NumberField) -> dict[str, Any]:
    out: dict[str, Any] = {"type": "integer" if node.integer else "number"}
    if node.minimum is not None:
        out["minimum"] = node.minimum
    if node.maximum is not None:
        out["maximum"] = node.maximum
    return out


def _boolean(node: BooleanField) -> dict[str, Any]:
    return {"type": "boolean"}


def _literal(node: LiteralField) -> dict[str, Any]:
    return {"type": _JSON_TYPES[type(node.value)], "enum": [node.value]}


def _enum(node: EnumField) -> dict[str, Any]:
    return {"type": "string", "enum": list(node.values)}


def _array(node: ArrayField) -> dict[str, Any]:
    out: dict[str, Any] = {"type": "array", "items": describe(node.items)}
    if node.min_items is not None:
        out["minItems"] = node.min_items
    if node.max_items is not None:
        out["maxItems"] = node.max_items
    return out


def _union(node: UnionField) -> dict[str, Any]:
    options = [describe(option) for option in node.options]
    types = {opt.get("type") for opt in options}
    if len(types) != 1 or None in types or "object" in types:
        return {"anyOf": options}

    merged: dict[str, Any] = {"type": types.pop()}
    if all("enum" in opt for opt in options):
        values: list[Any] = []
        for opt in options:
            values.extend(v for v in opt["enum"] if v not in values)
        merged["enum"] = values
    return merged


def _discriminated_union(node: DiscriminatedUnionField) -> dict[str, Any]:
    return {"anyOf": [describe(option) for option in node.options.values()]}


def _object(node: ObjectField) -> dict[str, Any]:
    properties = {name: describe(member) for name, member in node.fields.items()}
    required = [
        name
        for name, member in node.fields.items()
        if member.required and not member.has_default
    ]
    out: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        out["required"] = required
    return out


_DESCRIBERS: dict[type[Field], Callable[[Any], dict[str, Any]]] = {
    StringField: _string,
    NumberField: _number,
    BooleanField: _boolean,
    LiteralField: _literal,
    EnumField: _enum,
    ArrayField: _array,
    UnionField: _union,
    DiscriminatedUnionField: _discriminated_union,
    ObjectField: _object,
}


def describe(node: Field) -> dict[str, Any]:
    """Return the discovery representation of *node*.

    Pure: the same node always yields an equal, freshly built dict.
    """
    describer = _DESCRIBERS.get(type(node))
    out = describer(node) if describer else {"type": "string"}
    if node.description:
        out["description"] = node.description
    if node.has_default:
        out["default"] = copy.deepcopy(node.default)
    return out
