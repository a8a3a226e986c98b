"""Store factory functions for creating generated-store instances."""

import os
from pathlib import Path
from typing import Optional

from squirrel.domain.identity import TxnIdGenerator
from squirrel.domain.store import GeneratedStore
from squirrel.storage.local import LocalFileStore

BASE_DIR_ENV = "SQUIRREL_GENERATED_DIR"


def resolve_base_dir(base_dir: Optional[str] = None) -> Path:
    """Resolve the generated store directory.

    Args:
        base_dir: Explicit directory. If None, checks SQUIRREL_GENERATED_DIR
            environment variable, then defaults to ~/.squirrel/generated

    Returns:
        Path of the base directory
    """
    if base_dir is None:
        base_dir = os.environ.get(BASE_DIR_ENV)

    if base_dir is None:
        return Path.home() / ".squirrel" / "generated"

    return Path(base_dir)


def create_local_store(
    base_dir: Optional[str] = None,
    id_generator: Optional[TxnIdGenerator] = None,
) -> GeneratedStore:
    """Create a GeneratedStore backed by the local filesystem.

    Args:
        base_dir: Base directory (see resolve_base_dir)
        id_generator: Optional identifier generator for new transactions

    Returns:
        GeneratedStore instance
    """
    files = LocalFileStore(resolve_base_dir(base_dir))
    return GeneratedStore(files, id_generator=id_generator)
