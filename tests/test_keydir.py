"""Tests for private key storage."""

import os
import stat
import sys

import pytest

from ejson.config import DEFAULT_KEYDIR, ENV_KEYDIR
from ejson.errors import PrivateKeyNotFound
from ejson.keydir import key_path, load_private_key, resolve_keydir, save_private_key
from ejson.settings import Settings


class TestKeyStorage:
    """Tests for save_private_key / load_private_key."""

    def test_save_and_load(self, temp_dir, keypair):
        keydir = temp_dir / "keys"
        path = save_private_key(keypair, keydir)

        assert path == keydir / keypair.public_key
        assert load_private_key(keypair.public_key, keydir) == keypair.private_key

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_permissions_are_owner_only(self, temp_dir, keypair):
        path = save_private_key(keypair, temp_dir)
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    def test_whitespace_is_stripped(self, temp_dir, keypair):
        key_path(keypair.public_key, temp_dir).write_text(f"  {keypair.private_key}\n", encoding="utf-8")
        assert load_private_key(keypair.public_key, temp_dir) == keypair.private_key

    def test_missing_key(self, temp_dir, keypair):
        with pytest.raises(PrivateKeyNotFound) as exc_info:
            load_private_key(keypair.public_key, temp_dir)

        assert exc_info.value.public_key == keypair.public_key
        assert keypair.public_key in str(exc_info.value)


class TestResolveKeydir:
    """Tests for key directory precedence."""

    def test_default(self, monkeypatch):
        monkeypatch.delenv(ENV_KEYDIR, raising=False)
        assert str(resolve_keydir()) == DEFAULT_KEYDIR

    def test_settings_over_default(self, monkeypatch, temp_dir):
        monkeypatch.delenv(ENV_KEYDIR, raising=False)
        settings = Settings(keydir=str(temp_dir / "from-settings"))
        assert resolve_keydir(settings=settings) == temp_dir / "from-settings"

    def test_env_over_settings(self, monkeypatch, temp_dir):
        monkeypatch.setenv(ENV_KEYDIR, str(temp_dir / "from-env"))
        settings = Settings(keydir=str(temp_dir / "from-settings"))
        assert resolve_keydir(settings=settings) == temp_dir / "from-env"

    def test_explicit_over_env(self, monkeypatch, temp_dir):
        monkeypatch.setenv(ENV_KEYDIR, str(temp_dir / "from-env"))
        assert resolve_keydir(temp_dir / "explicit") == temp_dir / "explicit"

    def test_user_expanded(self, monkeypatch, temp_dir):
        monkeypatch.delenv(ENV_KEYDIR, raising=False)
        monkeypatch.setenv("HOME", str(temp_dir))
        assert resolve_keydir("~/keys") == temp_dir / "keys"
