from dataclasses import dataclass
from pathlib import Path
from compdb.core.common.enums import EntryKind

@dataclass(frozen=True)
class SearchRoot:
    """
    A top-level directory the walk starts from.
    Existence is not checked here; a bad root fails its own traversal.
    """
    path: Path

    def __post_init__(self):
        if str(self.path).strip() == "":
            raise ValueError("Search root cannot be empty.")

@dataclass(frozen=True)
class DirectoryEntry:
    """
    One immediate child of a listed directory.
    """
    path: Path
    kind: EntryKind

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

@dataclass
class WalkSummary:
    """
    Counters accumulated across every traversal unit of one walk.
    """
    directories_visited: int = 0
    files_found: int = 0
