import asyncio
from pathlib import Path
from typing import Optional
from compdb.core.config.settings import settings
from ..domain.interfaces import IFragmentReader
from ..domain.models import FragmentInterior


def strip_list_end(buffer: bytearray) -> bytearray:
    """
    Drops trailing bytes up to and including the last ']'.
    A buffer without any ']' is emptied completely.
    """
    end = buffer.rfind(settings.LIST_END)
    del buffer[max(end, 0):]
    return buffer


def extract_interior(data: bytes) -> bytes:
    """
    In-memory form of the splice: everything after the first '[' and
    before the last ']'. Returns b"" when there is no '['.
    """
    start = data.find(settings.LIST_START)
    if start == -1:
        return b""
    return bytes(strip_list_end(bytearray(data[start + 1:])))


class LocalFragmentReader(IFragmentReader):
    """
    Streams up to the first '[' in chunks, then buffers only the remainder.
    """

    def __init__(self, chunk_size: Optional[int] = None):
        self.chunk_size = chunk_size or settings.READ_CHUNK_SIZE

    async def read_interior(self, path: Path) -> FragmentInterior:
        return await asyncio.to_thread(self._read, path)

    def _read(self, path: Path) -> FragmentInterior:
        buffer = bytearray()
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(self.chunk_size), b""):
                start = chunk.find(settings.LIST_START)
                if start != -1:
                    buffer += chunk[start + 1:]
                    buffer += f.read()
                    break
            # No '[' anywhere: buffer stays empty

        return FragmentInterior(source=path, content=bytes(strip_list_end(buffer)))
