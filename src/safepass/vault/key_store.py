"""
Key Store: the single security key that protects every stored password.

Lifecycle:
  - absent: no file at the configured path
  - created: only after the user confirms, written once with mode 0600
  - present: read per operation, never rewritten, rotated or deleted here

Key material is handed out in a ``KeyMaterial`` buffer that is zeroed
when the operation that borrowed it finishes. Nothing caches the key
process-wide.
"""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from .encryption import EncryptionService
from .exceptions import KeyAlreadyExists, KeyStoreError

logger = logging.getLogger(__name__)

KEY_FILE_MODE = 0o600


class KeyMaterial:
    """Mutable buffer holding key bytes so they can be wiped after use."""

    __slots__ = ("_buf",)

    def __init__(self, data: Union[bytes, bytearray]):
        self._buf = bytearray(data)

    def __bytes__(self) -> bytes:
        return bytes(self._buf)

    def __len__(self) -> int:
        return len(self._buf)

    def __bool__(self) -> bool:
        return any(self._buf)

    def __repr__(self) -> str:
        return f"KeyMaterial(<{len(self._buf)} bytes>)"

    def wipe(self) -> None:
        """Overwrite the buffer with zeros."""
        for i in range(len(self._buf)):
            self._buf[i] = 0


class KeyStore:
    """Load and create the key file at a fixed path."""

    def __init__(self, key_path: Union[str, Path]):
        self.key_path = Path(key_path)

    def exists(self) -> bool:
        """True iff the key file is present and readable."""
        return self.key_path.is_file() and os.access(self.key_path, os.R_OK)

    def load(self) -> Optional[KeyMaterial]:
        """Return the key file content, or None if absent or unreadable."""
        try:
            data = self.key_path.read_bytes()
        except OSError as e:
            logger.debug(f"Key file not loaded from {self.key_path}: {e.strerror}")
            return None
        return KeyMaterial(data)

    @contextmanager
    def borrow(self) -> Iterator[Optional[KeyMaterial]]:
        """Load the key for the duration of a with-block, then wipe it."""
        key = self.load()
        try:
            yield key
        finally:
            if key is not None:
                key.wipe()

    def create(self) -> KeyMaterial:
        """Generate a new key and persist it, never replacing an existing file.

        The key is written to a temp file (mode 0600) in the same directory,
        fsynced, then hard-linked into place. The link fails if a key
        appeared in the meantime, so an existing key is never clobbered and
        a failed write never leaves a truncated key behind.

        Raises:
            KeyAlreadyExists: A key file is already present.
            KeyStoreError: The key could not be written.
        """
        if self.key_path.exists():
            raise KeyAlreadyExists(f"{self.key_path} already exists")

        key = EncryptionService.generate_key()
        tmp_path = self.key_path.with_name(f".{self.key_path.name}.{os.getpid()}.tmp")

        try:
            self.key_path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, KEY_FILE_MODE)
            with os.fdopen(fd, "wb") as f:
                f.write(key)
                f.flush()
                os.fsync(f.fileno())
            os.link(tmp_path, self.key_path)
        except FileExistsError as e:
            if self.key_path.exists():
                raise KeyAlreadyExists(f"{self.key_path} already exists") from e
            raise KeyStoreError(f"Could not write {self.key_path}: {e}") from e
        except OSError as e:
            raise KeyStoreError(f"Could not write {self.key_path}: {e}") from e
        finally:
            if tmp_path.exists():
                tmp_path.unlink()

        logger.info(f"Security key created at {self.key_path}")
        return KeyMaterial(key)
