from amic_invisible.storage.models import Assignment, LinkEntry
from amic_invisible.storage.records import CorruptRecordError, RecordFile
from amic_invisible.storage.repo import ASSIGNMENTS_FILENAME, LINKS_FILENAME, DataStore

__all__ = [
    "ASSIGNMENTS_FILENAME",
    "Assignment",
    "CorruptRecordError",
    "DataStore",
    "LINKS_FILENAME",
    "LinkEntry",
    "RecordFile",
]
