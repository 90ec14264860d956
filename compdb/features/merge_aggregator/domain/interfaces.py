from abc import ABC, abstractmethod
from pathlib import Path
from compdb.core.common.enums import AggregatorState
from .models import FragmentInterior

class IFragmentReader(ABC):
    """
    Contract for pulling the array interior out of a fragment file.
    """
    @abstractmethod
    async def read_interior(self, path: Path) -> FragmentInterior:
        """
        Reads `path` and returns the bytes between its first '[' and last ']'.
        Read errors are raised as OSError.
        """
        pass

class IOutputSink(ABC):
    """
    Contract for the single combined array being written.
    """
    path: Path

    @property
    @abstractmethod
    def state(self) -> AggregatorState:
        pass

    @abstractmethod
    def open(self) -> None:
        """Creates/truncates the target and writes the opening bracket."""
        pass

    @abstractmethod
    def write_fragment(self, content: bytes) -> int:
        """
        Appends one non-empty interior, preceded by a separator when needed.
        Returns the number of bytes written.
        """
        pass

    @abstractmethod
    def is_output(self, path: Path) -> bool:
        """True if `path` refers to the file being written."""
        pass

    @abstractmethod
    def finish(self) -> None:
        """Writes the closing bracket, flushes and closes."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Releases the handle without writing anything further."""
        pass
