from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional


class CorruptRecordError(ValueError):
    pass


class RecordFile:
    """A JSON document that is written at most once.

    The payload goes to a temporary file in the same directory first and is
    then hard-linked into place; linking fails when the target already exists,
    so a record is either absent or complete.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> Optional[Any]:
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise CorruptRecordError(f"{self.path} is not a readable JSON record: {exc}") from exc

    def create_if_absent(self, payload: Any) -> bool:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self.path.exists():
            return False

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(payload, tmp, indent=2)
                tmp.flush()
                os.fsync(tmp.fileno())
            try:
                os.link(tmp_name, self.path)
            except FileExistsError:
                return False
            return True
        finally:
            os.unlink(tmp_name)

    def __repr__(self) -> str:
        return f"<RecordFile(path={self.path})>"
