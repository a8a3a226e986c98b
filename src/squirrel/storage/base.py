"""Abstract file storage interface for the generated store."""

from abc import ABC, abstractmethod


class FileStore(ABC):
    """Abstract access to files under a base directory.

    Paths are relative, ``/``-separated strings such as
    ``"archive/ledger-202601.transactions"``.
    """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True if a file exists at path."""
        pass

    @abstractmethod
    def read_text(self, path: str) -> str:
        """Read a UTF-8 text file. Raises FileNotFoundError if absent."""
        pass

    @abstractmethod
    def write_text(self, path: str, text: str) -> None:
        """Create or replace a text file, creating parent directories."""
        pass

    @abstractmethod
    def rename(self, source: str, destination: str) -> None:
        """Move a file, creating the destination's parent directories."""
        pass

    @abstractmethod
    def makedirs(self, path: str = "") -> None:
        """Ensure a directory (default: the base directory) exists."""
        pass

    @abstractmethod
    def list_dir(self, path: str = "") -> list[str]:
        """List file names in a directory, sorted. Empty if absent."""
        pass

    def describe(self, path: str) -> str:
        """Return a human-readable location for path."""
        return path
