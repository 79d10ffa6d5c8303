"""
hotel_desk.services.documents

Employee document storage on the local filesystem.

Responsibilities:
- Store uploaded documents under a random name (original extension kept).
- Resolve stored names back to paths without letting a name escape the upload dir.
"""

from __future__ import annotations

import uuid
from pathlib import Path, PurePath

from starlette.concurrency import run_in_threadpool

from hotel_desk.services.errors import InvalidInputError, NotFoundError


class DocumentStore:
    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    async def save(self, *, filename: str, data: bytes) -> str:
        if not data:
            raise InvalidInputError("Uploaded file is empty")
        suffix = PurePath(filename or "").suffix.lower()
        name = f"{uuid.uuid4().hex}{suffix}"
        await run_in_threadpool(self._write, name, data)
        return name

    def path_for(self, name: str) -> Path:
        candidate = (self._root / name).resolve()
        if candidate.parent != self._root.resolve():
            raise InvalidInputError("Invalid document name")
        if not candidate.is_file():
            raise NotFoundError("Document not found")
        return candidate

    async def delete(self, name: str) -> None:
        try:
            path = self.path_for(name)
        except NotFoundError:
            return
        await run_in_threadpool(path.unlink, True)

    def _write(self, name: str, data: bytes) -> None:
        self._root.mkdir(parents=True, exist_ok=True)
        (self._root / name).write_bytes(data)
