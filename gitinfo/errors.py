from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class ValidationError:
    """One structural violation found while walking a document.

    ``path`` is the raw location (``""`` for the document itself); ``str()``
    renders the empty path as ``root``.
    """
    path: str
    message: str

    @property
    def location(self) -> str:
        return self.path or "root"

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"

    def to_dict(self) -> dict:
        return {"path": self.location, "message": self.message}


class ParseFailure(Exception):
    """Document or schema could not be read or parsed; nothing was validated."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source:
            return f"{self.source}: {self.message}"
        return self.message


class SchemaError(ParseFailure):
    """Schema parsed as JSON but uses vocabulary this validator does not support."""

    def __init__(self, problems: List[str], source: Optional[str] = None) -> None:
        self.problems = list(problems)
        summary = "invalid schema: " + "; ".join(self.problems)
        super().__init__(summary, source)
