"""Tests for document loading, saving and whole-file operations."""

import json

import pytest

from ejson.document import (
    decrypt_file,
    dump_document,
    encrypt_file,
    extract_public_key,
    load_document,
    save_document,
)
from ejson.errors import (
    FileReadError,
    FileWriteError,
    InvalidJSONData,
    MissingPublicKey,
)


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadDocument:
    """Tests for load_document."""

    def test_loads_object(self, temp_dir):
        path = write_json(temp_dir / "doc.json", {"b": 1, "a": "x"})

        doc = load_document(path)
        assert doc == {"b": 1, "a": "x"}
        assert list(doc) == ["b", "a"]

    def test_missing_file(self, temp_dir):
        with pytest.raises(FileReadError):
            load_document(temp_dir / "missing.json")

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "bad.json"
        path.write_text('{"a": ', encoding="utf-8")

        with pytest.raises(InvalidJSONData):
            load_document(path)

    def test_non_object_root(self, temp_dir):
        path = write_json(temp_dir / "list.json", ["a", "b"])

        with pytest.raises(InvalidJSONData):
            load_document(path)

    def test_invalid_utf8(self, temp_dir):
        path = temp_dir / "latin1.json"
        path.write_bytes(b'{"a": "\xff"}')

        with pytest.raises(InvalidJSONData):
            load_document(path)


class TestSaveDocument:
    """Tests for save_document."""

    def test_writes_utf8_json(self, temp_dir):
        path = temp_dir / "out" / "doc.json"
        save_document(path, {"name": "世界", "n": 1.5})

        text = path.read_text(encoding="utf-8")
        assert "世界" in text
        assert text.endswith("\n")
        assert json.loads(text) == {"name": "世界", "n": 1.5}

    def test_sort_keys_and_indent(self, temp_dir):
        path = temp_dir / "doc.json"
        save_document(path, {"b": 1, "a": 2}, indent=None, sort_keys=True)
        assert path.read_text(encoding="utf-8") == '{"a": 2, "b": 1}\n'

    def test_write_failure(self, temp_dir):
        blocker = temp_dir / "file"
        blocker.write_text("x", encoding="utf-8")

        with pytest.raises(FileWriteError):
            save_document(blocker / "doc.json", {"a": 1})

    def test_dump_keeps_order(self):
        assert dump_document({"z": 1, "a": 2}, indent=None) == '{"z": 1, "a": 2}\n'


class TestExtractPublicKey:
    """Tests for extract_public_key."""

    def test_present(self, keypair):
        assert extract_public_key({"_public_key": keypair.public_key}) == keypair.public_key

    @pytest.mark.parametrize("doc", [{}, {"_public_key": 123}, {"_public_key": None}, {"other": "x"}])
    def test_missing_or_not_string(self, doc):
        with pytest.raises(MissingPublicKey):
            extract_public_key(doc)


class TestFileOperations:
    """Tests for encrypt_file and decrypt_file."""

    def test_encrypt_then_decrypt(self, temp_dir, keypair, sample_secrets):
        path = write_json(temp_dir / "secrets.ejson", {"_public_key": keypair.public_key, **sample_secrets})

        encrypt_file(path)
        on_disk = json.loads(path.read_text(encoding="utf-8"))
        assert on_disk["_public_key"] == keypair.public_key
        assert on_disk["database"]["password"].startswith("EJ[1:")
        assert on_disk["database"]["port"] == 5432

        decrypted = decrypt_file(path, keypair.private_key)
        assert decrypted == {"_public_key": keypair.public_key, **sample_secrets}

    def test_encrypt_with_explicit_key(self, temp_dir, keypair):
        path = write_json(temp_dir / "secrets.json", {"password": "secret123"})

        result = encrypt_file(path, keypair.public_key)
        assert result["_public_key"] == keypair.public_key
        assert extract_public_key(load_document(path)) == keypair.public_key

    def test_encrypt_without_public_key(self, temp_dir):
        path = write_json(temp_dir / "secrets.json", {"password": "secret123"})

        with pytest.raises(MissingPublicKey):
            encrypt_file(path)
        assert json.loads(path.read_text(encoding="utf-8")) == {"password": "secret123"}

    def test_decrypt_does_not_modify_file(self, temp_dir, keypair):
        path = write_json(temp_dir / "secrets.ejson", {"_public_key": keypair.public_key, "a": "b"})
        encrypt_file(path)
        before = path.read_bytes()

        decrypt_file(path, keypair.private_key)
        assert path.read_bytes() == before

    def test_decrypt_requires_public_key(self, temp_dir, keypair):
        path = write_json(temp_dir / "plain.json", {"a": "b"})

        with pytest.raises(MissingPublicKey):
            decrypt_file(path, keypair.private_key)


class TestNumberHandling:
    """Numbers survive a save/load cycle within float limits."""

    def test_large_integers_exact(self, temp_dir, keypair):
        path = temp_dir / "numbers.ejson"
        path.write_text(
            '{"_public_key": "%s", "big": 123456789012345678901234567890}' % keypair.public_key,
            encoding="utf-8",
        )

        encrypt_file(path)
        assert load_document(path)["big"] == 123456789012345678901234567890

    def test_exponent_forms_become_floats(self, temp_dir, keypair):
        path = temp_dir / "numbers.ejson"
        path.write_text('{"_public_key": "%s", "n": 1e3}' % keypair.public_key, encoding="utf-8")

        encrypt_file(path)
        assert '"n": 1000.0' in path.read_text(encoding="utf-8")
