"""Walks a parsed document and a schema tree in lockstep, collecting every violation."""
from __future__ import annotations
import re
from typing import Any, List
from urllib.parse import urlparse

from gitinfo.errors import ValidationError
from gitinfo.schema import (
    ArraySchema,
    Format,
    ObjectSchema,
    PositionalItems,
    SchemaNode,
    StringSchema,
    UniformItems,
)

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
URI_SCHEMES = {"http", "https"}


def is_valid_uri(value: str) -> bool:
    """Absolute http(s) URI with a host."""
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme.lower() in URI_SCHEMES and bool(parsed.netloc)


def is_valid_email(value: str) -> bool:
    return EMAIL_RE.fullmatch(value) is not None


def validate(value: Any, schema: SchemaNode, path: str = "") -> List[ValidationError]:
    errors: List[ValidationError] = []
    _walk(value, schema, path, errors)
    return errors


def _walk(value: Any, schema: SchemaNode, path: str, errors: List[ValidationError]) -> None:
    if isinstance(schema, ObjectSchema):
        _object(value, schema, path, errors)
    elif isinstance(schema, ArraySchema):
        _array(value, schema, path, errors)
    elif isinstance(schema, StringSchema):
        _string(value, schema, path, errors)
    else:
        raise TypeError(f"unsupported schema node: {schema!r}")


def _object(value: Any, schema: ObjectSchema, path: str, errors: List[ValidationError]) -> None:
    if not isinstance(value, dict):
        errors.append(ValidationError(path, "expected object"))
        return
    if not schema.additional_properties:
        for key in value:
            if key not in schema.properties:
                errors.append(ValidationError(path, f'unknown property "{key}"'))
    for key, sub in schema.properties.items():
        if key in value:
            _walk(value[key], sub, f"{path}.{key}", errors)


def _array(value: Any, schema: ArraySchema, path: str, errors: List[ValidationError]) -> None:
    if not isinstance(value, list):
        errors.append(ValidationError(path, "expected array"))
        return
    items = schema.items
    if isinstance(items, PositionalItems):
        for i, (item, sub) in enumerate(zip(value, items.schemas)):
            _walk(item, sub, f"{path}[{i}]", errors)
    elif isinstance(items, UniformItems):
        for i, item in enumerate(value):
            _walk(item, items.schema, f"{path}[{i}]", errors)
    if schema.min_items is not None and len(value) < schema.min_items:
        errors.append(ValidationError(path, f"expected at least {schema.min_items} items"))
    if schema.max_items is not None and len(value) > schema.max_items:
        errors.append(ValidationError(path, f"expected at most {schema.max_items} items"))


def _string(value: Any, schema: StringSchema, path: str, errors: List[ValidationError]) -> None:
    if not isinstance(value, str):
        errors.append(ValidationError(path, "expected string"))
        return
    if schema.min_length is not None and len(value) < schema.min_length:
        errors.append(ValidationError(path, f"string too short (min {schema.min_length})"))
    if schema.format is Format.URI and not is_valid_uri(value):
        errors.append(ValidationError(path, f'invalid URI "{value}"'))
    if schema.format is Format.EMAIL and not is_valid_email(value):
        errors.append(ValidationError(path, f'invalid email "{value}"'))
    if schema.regex is not None and not schema.regex.search(value):
        errors.append(ValidationError(path, f"does not match pattern {schema.pattern}"))
