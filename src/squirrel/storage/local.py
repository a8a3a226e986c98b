"""Local filesystem implementation of FileStore."""

import os
import tempfile
from pathlib import Path

from squirrel.storage.base import FileStore


class LocalFileStore(FileStore):
    """FileStore rooted at a directory on disk."""

    def __init__(self, base_dir: str | Path):
        """Initialize local file store.

        Args:
            base_dir: Root directory of the generated store
        """
        self.base_dir = Path(base_dir)

    def _resolve(self, path: str) -> Path:
        return self.base_dir / path if path else self.base_dir

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def read_text(self, path: str) -> str:
        with open(self._resolve(path), "r", encoding="utf-8", newline="") as f:
            return f.read()

    def write_text(self, path: str, text: str) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)

        # Write to a sibling temp file and swap it in
        fd, tmp_path = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(text)
            os.replace(tmp_path, target)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def rename(self, source: str, destination: str) -> None:
        target = self._resolve(destination)
        target.parent.mkdir(parents=True, exist_ok=True)
        os.replace(self._resolve(source), target)

    def makedirs(self, path: str = "") -> None:
        self._resolve(path).mkdir(parents=True, exist_ok=True)

    def list_dir(self, path: str = "") -> list[str]:
        directory = self._resolve(path)
        if not directory.is_dir():
            return []
        return sorted(p.name for p in directory.iterdir() if p.is_file())

    def describe(self, path: str) -> str:
        return str(self._resolve(path))
