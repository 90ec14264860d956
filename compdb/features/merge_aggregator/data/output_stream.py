import os
from pathlib import Path
from typing import BinaryIO, Optional, Tuple
from compdb.core.common.enums import AggregatorState
from compdb.core.config.settings import settings
from ..domain.interfaces import IOutputSink

class OutputStream(IOutputSink):
    """
    Buffered writer for the combined array.
    Owned by a single aggregator; never shared between tasks.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.bytes_written = 0
        self._handle: Optional[BinaryIO] = None
        self._identity: Optional[Tuple[int, int]] = None
        self._state = AggregatorState.AWAITING_FIRST_ELEMENT

    @property
    def state(self) -> AggregatorState:
        return self._state

    def open(self) -> None:
        self._handle = open(self.path, "wb")
        stat = os.fstat(self._handle.fileno())
        self._identity = (stat.st_dev, stat.st_ino)
        self._write(settings.LIST_START)

    def write_fragment(self, content: bytes) -> int:
        if not content:
            return 0
        if self._state is AggregatorState.CLOSED:
            raise ValueError(f"Output already closed: {self.path}")

        written = 0
        if self._state is AggregatorState.HAS_ELEMENTS:
            written += self._write(settings.SEPARATOR)
        else:
            self._state = AggregatorState.HAS_ELEMENTS
        written += self._write(content)
        return written

    def is_output(self, path: Path) -> bool:
        if self._identity is None:
            return False
        stat = os.stat(path)
        return (stat.st_dev, stat.st_ino) == self._identity

    def finish(self) -> None:
        self._write(settings.LIST_END)
        self._handle.flush()
        self.close()
        self._state = AggregatorState.CLOSED

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def _write(self, data: bytes) -> int:
        if self._handle is None:
            raise ValueError(f"Output not open: {self.path}")
        self._handle.write(data)
        self.bytes_written += len(data)
        return len(data)
