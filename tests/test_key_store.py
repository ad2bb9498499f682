# Tests for the key store
# Covers: presence check, load, create (no overwrite, 0600, atomic),
#         borrow/wipe, KeyMaterial behaviour

import os
import stat
import sys

import pytest
from cryptography.fernet import Fernet

from safepass.vault import KeyAlreadyExists, KeyMaterial, KeyStore, KeyStoreError


class TestKeyPresence:
    def test_absent_key(self, key_store):
        assert key_store.exists() is False
        assert key_store.load() is None

    def test_directory_is_not_a_key(self, tmp_path):
        (tmp_path / "dir.key").mkdir()
        store = KeyStore(tmp_path / "dir.key")
        assert store.exists() is False
        assert store.load() is None

    def test_load_returns_raw_content(self, tmp_path):
        path = tmp_path / "manual.key"
        key = Fernet.generate_key()
        path.write_bytes(key)
        store = KeyStore(path)
        assert store.exists() is True
        assert bytes(store.load()) == key


class TestCreateKey:
    def test_create_persists_valid_key(self, key_store):
        created = key_store.create()
        assert key_store.exists()
        on_disk = key_store.key_path.read_bytes()
        assert bytes(created) == on_disk
        Fernet(on_disk)  # usable by the cipher

    def test_create_makes_parent_dirs(self, tmp_path):
        store = KeyStore(tmp_path / "nested" / "dir" / "safepass.key")
        store.create()
        assert store.exists()

    def test_create_never_overwrites(self, keyed_store):
        original = keyed_store.key_path.read_bytes()
        with pytest.raises(KeyAlreadyExists):
            keyed_store.create()
        assert keyed_store.key_path.read_bytes() == original

    def test_key_already_exists_is_key_store_error(self):
        assert issubclass(KeyAlreadyExists, KeyStoreError)

    def test_no_temp_file_left_behind(self, key_store):
        key_store.create()
        leftovers = [p.name for p in key_store.key_path.parent.iterdir() if p.name.endswith(".tmp")]
        assert leftovers == []

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_key_file_is_owner_only(self, key_store):
        key_store.create()
        mode = stat.S_IMODE(os.stat(key_store.key_path).st_mode)
        assert mode == 0o600

    def test_unwritable_location_raises_key_store_error(self, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("file in the way")
        store = KeyStore(blocker / "safepass.key")
        with pytest.raises(KeyStoreError):
            store.create()
        assert not store.exists()


class TestBorrow:
    def test_borrow_yields_key_then_wipes(self, keyed_store):
        with keyed_store.borrow() as key:
            assert bytes(key) == keyed_store.key_path.read_bytes()
            held = key
        assert bytes(held) == b"\x00" * len(held)
        assert not held

    def test_borrow_without_key_yields_none(self, key_store):
        with key_store.borrow() as key:
            assert key is None

    def test_borrow_wipes_on_exception(self, keyed_store):
        held = None
        with pytest.raises(RuntimeError):
            with keyed_store.borrow() as key:
                held = key
                raise RuntimeError("boom")
        assert not held

    def test_borrow_does_not_touch_file(self, keyed_store):
        original = keyed_store.key_path.read_bytes()
        with keyed_store.borrow():
            pass
        assert keyed_store.key_path.read_bytes() == original


class TestKeyMaterial:
    def test_repr_hides_content(self):
        material = KeyMaterial(b"super-secret-key")
        assert "super-secret-key" not in repr(material)
        assert "16 bytes" in repr(material)

    def test_wipe(self):
        material = KeyMaterial(b"abc")
        material.wipe()
        assert bytes(material) == b"\x00\x00\x00"
        assert len(material) == 3
