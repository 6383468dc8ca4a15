# mzsdrf/core/base_container.py
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterator, List, Protocol

if TYPE_CHECKING:
    from ..metadata.mapper import ExportedSample


class ContentGroup(Protocol):
    """A unit of container content that is written out as a whole."""

    def total_spectra(self) -> int:
        ...


class BaseContainerReader(ABC):
    """Abstract base class for streaming container readers."""

    @property
    @abstractmethod
    def source_files(self) -> List[str]:
        """Declared source file names, in document order."""
        pass

    @property
    @abstractmethod
    def samples(self) -> List["ExportedSample"]:
        """
        The header's sample list.

        The returned list is the reader's own and may be mutated in place;
        writers render whatever it holds when copying metadata.
        """
        pass

    @abstractmethod
    def iter_groups(self) -> Iterator[ContentGroup]:
        """Lazily yield content groups in document order."""
        pass

    @abstractmethod
    def iter_trailer(self) -> Iterator[bytes]:
        """Yield whatever follows the grouped content, once groups are exhausted."""
        pass


class BaseContainerWriter(ABC):
    """Abstract base class for streaming container writers."""

    @abstractmethod
    def copy_metadata_from(self, reader: BaseContainerReader) -> None:
        """Write the header of ``reader``, including its current sample list."""
        pass

    @abstractmethod
    def write_group(self, group: ContentGroup) -> None:
        """Write one content group."""
        pass

    @abstractmethod
    def finish(self, reader: BaseContainerReader) -> None:
        """Copy the trailer of ``reader`` and flush the output."""
        pass
