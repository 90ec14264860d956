from abc import ABC, abstractmethod
from pathlib import Path
from typing import List
from .models import DirectoryEntry

class IDirectoryLister(ABC):
    """
    Contract for enumerating a single directory without blocking the event loop.
    """
    @abstractmethod
    async def list_entries(self, directory: Path) -> List[DirectoryEntry]:
        """
        Returns the immediate entries of `directory`.
        Listing errors (permission denied, missing, not a directory) are raised as OSError.
        """
        pass
