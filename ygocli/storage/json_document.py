"""
Whole-document JSON persistence.

A store's data lives in one JSON object on disk. Reads load the entire
document, writes replace the entire document. There is no append log and
no partial update.

Writes go to a temp file in the same directory and are renamed over the
target, so a crash mid-write leaves either the old or the new document,
never a truncated one.

Read-modify-write sequences must run inside ``locked()``:
- an asyncio.Lock serializes coroutines in this process (REST server)
- an advisory lock on ``<name>.lock`` serializes separate processes (CLI)
"""

import asyncio
import json
import logging
import os
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import IO, Any

from ygocli.models.failure import PersistenceReadError, PersistenceWriteError

logger = logging.getLogger(__name__)


class JsonDocument:
    """One JSON object stored at ``path``."""

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()
        self.lock_path = self.path.with_name(f"{self.path.name}.lock")
        self._lock = asyncio.Lock()

    def __repr__(self) -> str:
        return f"JsonDocument({str(self.path)!r})"

    # --- Reading ---

    def load(self) -> dict[str, Any]:
        """
        Load the document.

        A missing file is an empty document. A file that exists but does not
        hold a JSON object is moved aside to ``<name>.corrupt-<timestamp>-<suffix>``
        and treated as empty, so the caller keeps working and the old bytes
        are still on disk for manual recovery.

        Raises:
            PersistenceReadError: If the file exists but the OS refuses to read it
        """
        try:
            return self._read()
        except PersistenceReadError as e:
            if not e.recoverable:
                raise
            backup = self._quarantine()
            logger.error(
                "Error loading %s (%s); moved it to %s and starting empty",
                self.path,
                e.detail,
                backup,
            )
            return {}

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            raw = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise PersistenceReadError(str(self.path), detail=str(e)) from e
        except OSError as e:
            raise PersistenceReadError(str(self.path), detail=str(e), recoverable=False) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceReadError(str(self.path), detail=str(e)) from e

        if not isinstance(data, dict):
            raise PersistenceReadError(
                str(self.path),
                detail=f"expected an object, got {type(data).__name__}",
            )
        return data

    def _quarantine(self) -> Path | None:
        """Rename an unreadable document out of the way. Returns the new path."""
        stamp = datetime.now().strftime("%Y%m%d%H%M%S")
        backup: Path | None = None
        try:
            # mkstemp reserves a unique name; the rename then fills it
            fd, backup_name = tempfile.mkstemp(
                prefix=f"{self.path.name}.corrupt-{stamp}-",
                dir=self.path.parent,
            )
            os.close(fd)
            backup = Path(backup_name)
            os.replace(self.path, backup)
        except OSError as e:
            if backup is not None:
                backup.unlink(missing_ok=True)
            logger.warning("Could not move %s aside: %s", self.path, e)
            return None
        return backup

    # --- Writing ---

    def save(self, data: dict[str, Any]) -> None:
        """
        Replace the document with ``data``.

        Raises:
            PersistenceWriteError: If the directory or file cannot be written
        """
        payload = json.dumps(data, indent=2, ensure_ascii=False)
        tmp_path: Path | None = None

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                dir=self.path.parent,
            )
            tmp_path = Path(tmp_name)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise PersistenceWriteError(str(self.path), detail=str(e)) from e

    async def write(self, data: dict[str, Any]) -> None:
        """``save`` on a worker thread, so the fsync does not stall the event loop."""
        await asyncio.to_thread(self.save, data)

    async def clear(self) -> None:
        """Replace the document with an empty object."""
        await self.write({})

    # --- Locking ---

    @asynccontextmanager
    async def locked(self) -> AsyncIterator[None]:
        """Hold the in-process and cross-process locks for a read-modify-write."""
        async with self._lock:
            handle = await asyncio.to_thread(self._acquire_file_lock)
            try:
                yield
            finally:
                _release_file_lock(handle)

    def _acquire_file_lock(self) -> IO[str]:
        try:
            self.lock_path.parent.mkdir(parents=True, exist_ok=True)
            handle = open(self.lock_path, "a+", encoding="utf-8")  # noqa: SIM115
        except OSError as e:
            raise PersistenceWriteError(str(self.lock_path), detail=str(e)) from e

        try:
            if os.name == "nt":
                import msvcrt

                handle.seek(0)
                msvcrt.locking(handle.fileno(), msvcrt.LK_LOCK, 1)
            else:
                import fcntl

                fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
        except OSError as e:
            handle.close()
            raise PersistenceWriteError(str(self.lock_path), detail=str(e)) from e

        return handle


def _release_file_lock(handle: IO[str]) -> None:
    try:
        if os.name == "nt":
            import msvcrt

            handle.seek(0)
            msvcrt.locking(handle.fileno(), msvcrt.LK_UNLCK, 1)
        else:
            import fcntl

            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
    finally:
        handle.close()
