# mzsdrf/core/value.py
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
_FLOAT_PATTERN = re.compile(r"^[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?$")


class ValueKind(Enum):
    """Kind of a parsed table cell."""

    EMPTY = "empty"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"


@dataclass(frozen=True)
class Value:
    """
    Typed scalar wrapper for a single SDRF cell.

    The original cell text is kept alongside the parsed number so values are
    written back exactly as they appeared in the table (e.g. "01" stays "01").
    """

    kind: ValueKind
    text: str = ""
    number: Optional[Union[int, float]] = None

    @classmethod
    def parse(cls, text: str) -> "Value":
        """
        Parse a cell into a Value.

        Args:
            text: Raw cell content

        Returns:
            An empty, integer, float or string Value
        """
        if text == "":
            return cls.empty()
        stripped = text.strip()
        if _INTEGER_PATTERN.match(stripped):
            return cls(ValueKind.INTEGER, text, int(stripped))
        if _FLOAT_PATTERN.match(stripped):
            return cls(ValueKind.FLOAT, text, float(stripped))
        return cls(ValueKind.STRING, text)

    @classmethod
    def empty(cls) -> "Value":
        return cls(ValueKind.EMPTY)

    @property
    def is_empty(self) -> bool:
        return self.kind is ValueKind.EMPTY

    @property
    def is_numeric(self) -> bool:
        return self.kind in (ValueKind.INTEGER, ValueKind.FLOAT)

    def as_str(self) -> str:
        return self.text

    def xsd_type(self) -> Optional[str]:
        """XML Schema type name for numeric values, None otherwise."""
        if self.kind is ValueKind.INTEGER:
            return "xsd:integer"
        if self.kind is ValueKind.FLOAT:
            return "xsd:double"
        return None

    def __str__(self) -> str:
        return self.text
