"""Tests for file stores, factories and side-index mappers."""

import json
from pathlib import Path

import pytest

from squirrel.domain.store import GeneratedStore
from squirrel.storage.factories import create_local_store, resolve_base_dir
from squirrel.storage.local import LocalFileStore
from squirrel.storage.mappers import (
    CorruptDocument,
    index_from_json,
    index_to_json,
    sources_from_json,
    sources_to_json,
)
from squirrel.storage.memory import MemoryFileStore


class TestLocalFileStore:
    """Tests for LocalFileStore."""

    def test_write_creates_parents(self, tmp_path):
        """Writing a nested path creates its directories."""
        files = LocalFileStore(tmp_path / "base")

        files.write_text("archive/ledger-202601.transactions", "x\r\ny\n")

        assert files.exists("archive/ledger-202601.transactions")
        assert files.read_text("archive/ledger-202601.transactions") == "x\r\ny\n"
        assert files.list_dir("archive") == ["ledger-202601.transactions"]

    def test_write_leaves_no_temp_files(self, tmp_path):
        """Replacing a file does not leave temporary siblings."""
        files = LocalFileStore(tmp_path)

        files.write_text("index.json", "{}")
        files.write_text("index.json", '{"txn_ids": []}')

        assert sorted(p.name for p in tmp_path.iterdir()) == ["index.json"]
        assert files.read_text("index.json") == '{"txn_ids": []}'

    def test_rename(self, tmp_path):
        """Renaming moves content into a new directory."""
        files = LocalFileStore(tmp_path)
        files.write_text("ledger.transactions", "content")

        files.rename("ledger.transactions", "archive/ledger-202512.transactions")

        assert not files.exists("ledger.transactions")
        assert files.read_text("archive/ledger-202512.transactions") == "content"

    def test_missing_file(self, tmp_path):
        """Reading a missing file raises FileNotFoundError."""
        files = LocalFileStore(tmp_path)

        assert not files.exists("ledger.transactions")
        assert files.list_dir("archive") == []
        with pytest.raises(FileNotFoundError):
            files.read_text("ledger.transactions")


class TestMemoryFileStore:
    """Tests for MemoryFileStore."""

    def test_round_trip(self):
        """Written files can be read, renamed and listed."""
        files = MemoryFileStore()

        files.write_text("a.txt", "1")
        files.rename("a.txt", "dir/b.txt")

        assert files.files == {"dir/b.txt": "1"}
        assert files.list_dir("dir") == ["b.txt"]
        assert files.list_dir() == []

    def test_missing_file(self):
        """Reading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            MemoryFileStore().read_text("nope")


class TestMappers:
    """Tests for side-index JSON mappers."""

    def test_index_round_trip(self):
        """Identifiers are written sorted."""
        text = index_to_json({"b", "a"})

        assert json.loads(text) == {"txn_ids": ["a", "b"]}
        assert index_from_json(text) == {"a", "b"}

    def test_sources_round_trip(self):
        """Paths are written sorted and read back deduplicated."""
        assert json.loads(sources_to_json(["/z", "/a"])) == {"paths": ["/a", "/z"]}
        assert sources_from_json('{"paths": ["/a", "/b", "/a"]}') == ["/a", "/b"]

    def test_missing_key_is_empty(self):
        """An object without the key decodes to an empty value."""
        assert index_from_json("{}") == set()
        assert sources_from_json("{}") == []

    @pytest.mark.parametrize(
        "text", ["not json", "[]", '{"txn_ids": "abc"}', '{"txn_ids": [1, 2]}']
    )
    def test_corrupt_index(self, text):
        """Malformed documents raise CorruptDocument."""
        with pytest.raises(CorruptDocument):
            index_from_json(text)


class TestFactories:
    """Tests for store factories."""

    def test_explicit_base_dir(self, tmp_path, monkeypatch):
        """An explicit directory wins over the environment."""
        monkeypatch.setenv("SQUIRREL_GENERATED_DIR", str(tmp_path / "env"))

        assert resolve_base_dir(str(tmp_path / "arg")) == tmp_path / "arg"

    def test_env_base_dir(self, tmp_path, monkeypatch):
        """The environment variable is used when no directory is given."""
        monkeypatch.setenv("SQUIRREL_GENERATED_DIR", str(tmp_path / "env"))

        assert resolve_base_dir() == tmp_path / "env"

    def test_default_base_dir(self, tmp_path, monkeypatch):
        """The default lives under the home directory."""
        monkeypatch.delenv("SQUIRREL_GENERATED_DIR", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))

        assert resolve_base_dir() == Path(tmp_path) / ".squirrel" / "generated"

    def test_create_local_store(self, tmp_path, id_generator):
        """The factory builds a store over the local filesystem."""
        store = create_local_store(str(tmp_path), id_generator=id_generator)

        assert isinstance(store, GeneratedStore)
        assert isinstance(store.files, LocalFileStore)
        assert store.files.base_dir == tmp_path
        assert store.id_generator is id_generator
