"""In-memory implementation of FileStore, used by tests."""

from posixpath import dirname

from squirrel.storage.base import FileStore


class MemoryFileStore(FileStore):
    """FileStore backed by a dict of path to text."""

    def __init__(self, files: dict[str, str] | None = None):
        self.files: dict[str, str] = dict(files or {})
        self.directories: set[str] = {""}
        for path in self.files:
            self._add_parents(path)

    def _add_parents(self, path: str) -> None:
        parent = dirname(path)
        while parent:
            self.directories.add(parent)
            parent = dirname(parent)

    def exists(self, path: str) -> bool:
        return path in self.files

    def read_text(self, path: str) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(f"No such file: '{path}'") from None

    def write_text(self, path: str, text: str) -> None:
        self._add_parents(path)
        self.files[path] = text

    def rename(self, source: str, destination: str) -> None:
        text = self.read_text(source)
        del self.files[source]
        self.write_text(destination, text)

    def makedirs(self, path: str = "") -> None:
        if path:
            self.directories.add(path)
            self._add_parents(path)

    def list_dir(self, path: str = "") -> list[str]:
        return sorted(
            name.rsplit("/", 1)[-1]
            for name in self.files
            if dirname(name) == path
        )
