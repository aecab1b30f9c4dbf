"""Read, normalize, parse and validate a document in one call."""
from __future__ import annotations
import logging
import pathlib
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from gitinfo import jsonc
from gitinfo.config import settings
from gitinfo.errors import ParseFailure, ValidationError
from gitinfo.schema import SchemaNode
from gitinfo.validator import validate

logger = logging.getLogger(__name__)

DATA_IMAGE_PREFIX = "data:image/"


@dataclass
class Report:
    source: str
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
        }


def drop_data_uri_icon(document: Any, errors: List[ValidationError]) -> List[ValidationError]:
    """Accept an inline ``data:image/`` icon that the URI format check rejected."""
    if not isinstance(document, dict):
        return errors
    icon = document.get("icon")
    if not (isinstance(icon, str) and icon.startswith(DATA_IMAGE_PREFIX)):
        return errors
    return [e for e in errors if not (e.path == ".icon" and e.message.startswith("invalid URI"))]


def check_text(
    text: str,
    schema: SchemaNode,
    source: str = "<string>",
    allow_data_uri_icon: Optional[bool] = None,
) -> Report:
    document = jsonc.loads(text, source)
    errors = validate(document, schema)
    if settings.allow_data_uri_icon if allow_data_uri_icon is None else allow_data_uri_icon:
        errors = drop_data_uri_icon(document, errors)
    logger.debug("%s: %d error(s)", source, len(errors))
    return Report(source, errors)


def check_file(
    path: Union[str, pathlib.Path],
    schema: SchemaNode,
    allow_data_uri_icon: Optional[bool] = None,
) -> Report:
    p = pathlib.Path(path)
    if not p.is_file():
        raise ParseFailure(f"File not found: {p}")
    try:
        # utf-8-sig tolerates a leading BOM
        text = p.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseFailure(f"Error reading file: {e}", str(p)) from e
    return check_text(text, schema, str(p), allow_data_uri_icon)
