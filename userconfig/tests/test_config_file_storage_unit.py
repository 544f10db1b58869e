#!/usr/bin/env python3
"""Unit tests for the config document codec and atomic writes."""

from __future__ import annotations

import os
import stat
from unittest.mock import patch

import pytest

from userconfig.core.config.errors import ConfigDecodeError
from userconfig.core.config.file_storage import (
    ConfigDocument,
    decode_config_document,
    encode_config_document,
    read_config_document,
    write_config_document_atomic,
)


class TestDecodeConfigDocument:
    def test_reads_all_sections(self, tmp_path):
        text = (
            'additional_config = ["plugins", "themes"]\n'
            'raw_files = ["cache.db"]\n'
            "\n"
            "[general]\n"
            'theme = "dark"\n'
            '"odd key" = "v"\n'
        )

        doc = decode_config_document(text, source=tmp_path / "x.conf")

        assert doc.config_files == ["plugins", "themes"]
        assert doc.raw_files == ["cache.db"]
        assert doc.values == {"theme": "dark", "odd key": "v"}

    def test_missing_sections_decode_as_empty(self, tmp_path):
        doc = decode_config_document("", source=tmp_path / "x.conf")
        assert doc == ConfigDocument()

    def test_unknown_sections_are_ignored(self, tmp_path):
        doc = decode_config_document('[other]\na = "b"\n', source=tmp_path / "x.conf")
        assert doc.values == {}

    def test_duplicate_config_files_are_collapsed(self, tmp_path):
        doc = decode_config_document(
            'additional_config = ["a", "b", "a"]\n', source=tmp_path / "x.conf"
        )
        assert doc.config_files == ["a", "b"]

    @pytest.mark.parametrize(
        "text",
        [
            "this is = = not toml",
            "[general]\ncount = 3\n",
            'general = "flat"\n',
            "additional_config = [1, 2]\n",
            'raw_files = "cache.db"\n',
        ],
    )
    def test_malformed_documents_raise(self, text, tmp_path):
        with pytest.raises(ConfigDecodeError):
            decode_config_document(text, source=tmp_path / "x.conf")


class TestEncodeConfigDocument:
    def test_writes_three_sections(self):
        text = encode_config_document(
            ConfigDocument(config_files=["plugins"], raw_files=[], values={"theme": "dark"})
        )

        assert 'additional_config = [' in text
        assert "raw_files = []" in text
        assert "[general]" in text
        assert 'theme = "dark"' in text

    def test_control_characters_are_escaped(self):
        text = encode_config_document(ConfigDocument(values={"k": "a\x00b\nc"}))
        assert "\x00" not in text
        assert 'k = "a\\u0000b\\nc"' in text


class TestReadConfigDocument:
    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_config_document(tmp_path / "missing.conf")


class TestWriteConfigDocumentAtomic:
    def test_write_then_read(self, tmp_path):
        config_file = tmp_path / "myapp.conf"
        doc = ConfigDocument(config_files=["extra"], raw_files=["db"], values={"a": "1", "b": "é"})

        write_config_document_atomic(config_file, doc)

        assert read_config_document(config_file) == doc

    def test_sets_file_mode(self, tmp_path):
        config_file = tmp_path / "myapp.conf"
        write_config_document_atomic(config_file, ConfigDocument())
        assert stat.S_IMODE(os.stat(config_file).st_mode) == 0o644

    def test_replaces_previous_content(self, tmp_path):
        config_file = tmp_path / "myapp.conf"
        config_file.write_text('[general]\nold = "data"\n')

        write_config_document_atomic(config_file, ConfigDocument(values={"new": "data"}))

        assert read_config_document(config_file).values == {"new": "data"}

    def test_no_temp_files_left_behind(self, tmp_path):
        config_file = tmp_path / "myapp.conf"
        write_config_document_atomic(config_file, ConfigDocument(values={"a": "b"}))
        assert [p.name for p in tmp_path.iterdir()] == ["myapp.conf"]

    def test_failed_replace_keeps_old_file_and_cleans_up(self, tmp_path):
        config_file = tmp_path / "myapp.conf"
        write_config_document_atomic(config_file, ConfigDocument(values={"a": "old"}))

        with patch("os.replace", side_effect=OSError("replace failed")):
            with pytest.raises(OSError, match="replace failed"):
                write_config_document_atomic(config_file, ConfigDocument(values={"a": "new"}))

        assert read_config_document(config_file).values == {"a": "old"}
        assert [p.name for p in tmp_path.iterdir()] == ["myapp.conf"]

    def test_failed_temp_creation_raises(self, tmp_path):
        config_file = tmp_path / "myapp.conf"

        with patch("tempfile.mkstemp", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                write_config_document_atomic(config_file, ConfigDocument())

        assert not config_file.exists()

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            write_config_document_atomic(tmp_path / "nope" / "myapp.conf", ConfigDocument())
