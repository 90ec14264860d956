import asyncio
import os
from pathlib import Path
from typing import List
from compdb.core.common.enums import EntryKind
from ..domain.interfaces import IDirectoryLister
from ..domain.models import DirectoryEntry

class ScandirLister(IDirectoryLister):
    """
    Lists directories with os.scandir on a worker thread.
    """

    async def list_entries(self, directory: Path) -> List[DirectoryEntry]:
        return await asyncio.to_thread(self._scan, directory)

    def _scan(self, directory: Path) -> List[DirectoryEntry]:
        entries = []
        with os.scandir(directory) as it:
            for entry in it:
                # Symlinked directories are not followed, so cycles cannot occur
                kind = EntryKind.DIRECTORY if entry.is_dir(follow_symlinks=False) else EntryKind.FILE
                entries.append(DirectoryEntry(path=Path(directory) / entry.name, kind=kind))
        return entries
