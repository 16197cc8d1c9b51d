"""Parameter schemas: declaration, validation, and discovery output."""

from things_mcp.schema.discovery import describe
from things_mcp.schema.fields import (
    MISSING,
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
    validate,
)

__all__ = [
    "MISSING",
    "ArrayField",
    "BooleanField",
    "DiscriminatedUnionField",
    "EnumField",
    "Field",
    "LiteralField",
    "NumberField",
    "ObjectField",
    "StringField",
    "UnionField",
    "describe",
    "validate",
]
