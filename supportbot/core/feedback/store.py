"""
Fallback store for the agent console.

Keeps every pipeline outcome that needed a human in one JSON array on disk.
The file is rewritten whole on each write through a temp file and
``os.replace``; read-modify-write cycles hold a lock shared by every store
instance pointing at the same path.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any

from pydantic import ValidationError

from supportbot.core.models import FallbackEntry, QueryPlan

logger = logging.getLogger(__name__)

_path_locks: dict[Path, Lock] = {}
_path_locks_guard = Lock()


def _lock_for(path: Path) -> Lock:
    with _path_locks_guard:
        return _path_locks.setdefault(path, Lock())


class FallbackStoreCorruptError(Exception):
    """Raised internally when the store file cannot be decoded."""

    pass


class FallbackStore:
    """
    File-backed collection of FallbackEntry records.

    A missing or unreadable file reads as an empty collection. A corrupt
    file is moved aside (``<name>.corrupt-<stamp>``) before the next write
    replaces it, so its contents can still be recovered by hand.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path).resolve()
        self._lock = _lock_for(self._path)

    @property
    def path(self) -> Path:
        return self._path

    def log(
        self,
        user_query: str,
        llm_plan: QueryPlan | dict[str, Any] | None,
        db_result: Any,
        llm_reply: str,
        human_reply: str | None = None,
    ) -> FallbackEntry:
        """
        Append a new entry stamped with the current time.

        Returns:
            The entry as stored.
        """
        if isinstance(llm_plan, QueryPlan):
            llm_plan = llm_plan.model_dump(mode="json", exclude_none=True)

        entry = FallbackEntry(
            user_query=user_query,
            llm_plan=llm_plan,
            db_result=db_result,
            llm_reply=llm_reply,
            human_reply=human_reply,
        )

        with self._lock:
            entries = self._read_for_write()
            entries.append(entry)
            self._write(entries)

        logger.info("Fallback logged at %s (id=%s)", entry.timestamp, entry.id)
        return entry

    def list(self) -> list[FallbackEntry]:
        """Return every stored entry in insertion order."""
        with self._lock:
            try:
                return self._read()
            except FallbackStoreCorruptError as e:
                logger.error("Fallback store unreadable, returning empty: %s", e)
                return []

    def update(self, key: str, human_reply: str) -> bool:
        """
        Record a human reply on the first entry whose timestamp or id is ``key``.

        Returns:
            True if an entry was updated, False if none matched.
        """
        with self._lock:
            try:
                entries = self._read()
            except FallbackStoreCorruptError as e:
                logger.error("Fallback store unreadable, cannot update: %s", e)
                return False

            for entry in entries:
                if entry.timestamp == key or entry.id == key:
                    entry.human_reply = human_reply
                    self._write(entries)
                    logger.info("Fallback entry %s updated", key)
                    return True

        logger.warning("Fallback entry %s not found for update", key)
        return False

    # -------------------------
    # File access (lock held)
    # -------------------------

    def _read(self) -> list[FallbackEntry]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (UnicodeDecodeError, OSError) as e:
            raise FallbackStoreCorruptError(str(e)) from e

        if not raw.strip():
            return []

        try:
            records = json.loads(raw)
            if not isinstance(records, list):
                raise FallbackStoreCorruptError("store root is not a list")
            return [FallbackEntry.model_validate(record) for record in records]
        except (json.JSONDecodeError, ValidationError) as e:
            raise FallbackStoreCorruptError(str(e)) from e

    def _read_for_write(self) -> list[FallbackEntry]:
        try:
            return self._read()
        except FallbackStoreCorruptError as e:
            backup = self._quarantine()
            logger.warning(
                "Fallback store corrupt (%s); moved to %s and starting fresh", e, backup
            )
            return []

    def _quarantine(self) -> Path:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%f")
        backup = self._path.with_name(f"{self._path.name}.corrupt-{stamp}")
        os.replace(self._path, backup)
        return backup

    def _write(self, entries: list[FallbackEntry]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps([e.to_record() for e in entries], indent=2)

        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
