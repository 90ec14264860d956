from dataclasses import dataclass
from pathlib import Path
from typing import Optional

@dataclass(frozen=True)
class FragmentInterior:
    """
    The element list of one fragment, with its outer brackets removed.
    Bytes are kept verbatim; nothing here is parsed as JSON.
    """
    source: Path
    content: bytes

    @property
    def is_empty(self) -> bool:
        return len(self.content) == 0

@dataclass
class MergeSummary:
    """
    Report returned after the output array has been closed.
    """
    output_path: Optional[Path] = None
    fragments_found: int = 0
    fragments_merged: int = 0
    fragments_empty: int = 0
    fragments_skipped: int = 0
    bytes_written: int = 0
