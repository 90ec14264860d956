# File: compdb/core/common/enums.py

from enum import Enum, unique

@unique
class EntryKind(str, Enum):
    DIRECTORY = "directory"
    FILE = "file"

@unique
class AggregatorState(str, Enum):
    AWAITING_FIRST_ELEMENT = "awaiting_first_element"
    HAS_ELEMENTS = "has_elements"
    CLOSED = "closed"
