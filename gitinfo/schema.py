"""Schema tree for the supported vocabulary and the loader that builds it.

A schema document is first checked against ``schemas/vocabulary.schema.json``
with jsonschema, then turned into immutable ``SchemaNode`` dataclasses that the
validator walks.
"""
from __future__ import annotations
import json
import logging
import pathlib
import re
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from jsonschema import Draft202012Validator

from gitinfo.errors import ParseFailure, SchemaError

logger = logging.getLogger(__name__)

SCHEMA_DIR = pathlib.Path(__file__).resolve().parent / "schemas"
BUNDLED_SCHEMA = SCHEMA_DIR / "gitinfo.schema.json"
VOCABULARY_SCHEMA = SCHEMA_DIR / "vocabulary.schema.json"


class Format(str, Enum):
    URI = "uri"
    EMAIL = "email"


@dataclass(frozen=True)
class ObjectSchema:
    properties: Mapping[str, "SchemaNode"] = field(default_factory=dict)
    additional_properties: bool = True


@dataclass(frozen=True)
class UniformItems:
    schema: "SchemaNode"


@dataclass(frozen=True)
class PositionalItems:
    schemas: Tuple["SchemaNode", ...]


ItemsSpec = Union[UniformItems, PositionalItems]


@dataclass(frozen=True)
class ArraySchema:
    items: Optional[ItemsSpec] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None


@dataclass(frozen=True)
class StringSchema:
    min_length: Optional[int] = None
    format: Optional[Format] = None
    pattern: Optional[str] = None
    regex: Optional[re.Pattern] = field(default=None, init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.pattern is not None:
            object.__setattr__(self, "regex", re.compile(self.pattern))


SchemaNode = Union[ObjectSchema, ArraySchema, StringSchema]


def _json_path(error) -> str:
    path = "$"
    for part in error.absolute_path:
        path += f"[{part}]" if isinstance(part, int) else f".{part}"
    return path


@lru_cache(maxsize=1)
def _vocabulary_validator() -> Draft202012Validator:
    return Draft202012Validator(json.loads(VOCABULARY_SCHEMA.read_text(encoding="utf-8")))


def vocabulary_problems(document: Any) -> List[str]:
    """Every way ``document`` strays from the supported vocabulary, in path order."""
    errs = sorted(_vocabulary_validator().iter_errors(document), key=_json_path)
    return [f"{_json_path(e)}: {e.message}" for e in errs]


def _count(node: Dict[str, Any], key: str) -> Optional[int]:
    # the vocabulary accepts 2.0 as an integer
    value = node.get(key)
    return None if value is None else int(value)


def _build(node: Dict[str, Any], where: str, problems: List[str]) -> SchemaNode:
    kind = node["type"]
    if kind == "object":
        properties = {
            name: _build(sub, f"{where}.properties.{name}", problems)
            for name, sub in node.get("properties", {}).items()
        }
        return ObjectSchema(
            properties=MappingProxyType(properties),
            additional_properties=node.get("additionalProperties", True),
        )
    if kind == "array":
        raw_items = node.get("items")
        items: Optional[ItemsSpec] = None
        if isinstance(raw_items, list):
            items = PositionalItems(tuple(
                _build(sub, f"{where}.items[{i}]", problems) for i, sub in enumerate(raw_items)
            ))
        elif raw_items is not None:
            items = UniformItems(_build(raw_items, f"{where}.items", problems))
        return ArraySchema(items=items, min_items=_count(node, "minItems"), max_items=_count(node, "maxItems"))
    fmt = node.get("format")
    try:
        return StringSchema(
            min_length=_count(node, "minLength"),
            format=Format(fmt) if fmt else None,
            pattern=node.get("pattern"),
        )
    except re.error as e:
        problems.append(f"{where}.pattern: invalid regular expression {node['pattern']!r} ({e})")
        return StringSchema(min_length=_count(node, "minLength"), format=Format(fmt) if fmt else None)


def parse_schema(document: Any, source: Optional[str] = None) -> SchemaNode:
    """Build the schema tree for an already-parsed schema document."""
    problems = vocabulary_problems(document)
    if problems:
        raise SchemaError(problems, source)
    root = _build(document, "$", problems)
    if problems:
        raise SchemaError(problems, source)
    return root


def read_schema_document(path: Union[str, pathlib.Path]) -> Dict[str, Any]:
    p = pathlib.Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ParseFailure(f"Schema not found: {p}") from None
    except OSError as e:
        raise ParseFailure(f"Error reading schema: {e}", str(p)) from e
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as e:
        raise ParseFailure(f"Error parsing schema: {e}", str(p)) from e


@lru_cache(maxsize=None)
def _load(resolved: str) -> SchemaNode:
    root = parse_schema(read_schema_document(resolved), resolved)
    logger.debug("loaded schema %s", resolved)
    return root


def load_schema(path: Union[str, pathlib.Path] = BUNDLED_SCHEMA) -> SchemaNode:
    """Load and cache the schema tree at ``path`` (the bundled ``.gitinfo`` schema by default)."""
    return _load(str(pathlib.Path(path).resolve()))
