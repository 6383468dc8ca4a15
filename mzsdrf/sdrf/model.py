# mzsdrf/sdrf/model.py
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

from ..core.value import Value
from .columns import ColumnClass, canonical_name

DATA_FILE = "data file"
INSTRUMENT = "instrument"


@dataclass(frozen=True)
class Field:
    """A single SDRF cell together with its column header and class."""

    name: str
    field_class: ColumnClass
    value: Value

    @property
    def canonical_name(self) -> str:
        """Column name without its class prefix and brackets."""
        return canonical_name(self.name, self.field_class)


@dataclass(frozen=True)
class SampleRow:
    """
    One parsed SDRF row.

    Fields are split by column class and kept in table order within each
    class. Replicates are not merged: every row is its own sample.
    """

    name: str
    index: int = 0
    fields: Tuple[Field, ...] = field(default_factory=tuple)
    characteristics: Tuple[Field, ...] = field(default_factory=tuple)
    comments: Tuple[Field, ...] = field(default_factory=tuple)
    factors: Tuple[Field, ...] = field(default_factory=tuple)

    def iter_fields(self) -> Iterator[Field]:
        """Iterate innate, characteristic, comment and factor fields in order."""
        yield from self.fields
        yield from self.characteristics
        yield from self.comments
        yield from self.factors

    def data_file(self) -> Optional[str]:
        """Return the first non-empty ``comment[data file]`` value, if any."""
        for comment in self.comments:
            if comment.canonical_name == DATA_FILE and not comment.value.is_empty:
                return comment.value.as_str()
        return None
