# SafePass - Vault Module
#
# Encrypted service records in SQLite, unlocked by a single key file.
# Passwords are stored as Fernet tokens; the key never enters the database.

from .encryption import EncryptionService
from .exceptions import (
    DecryptError,
    EmptyResult,
    MalformedKey,
    KeyAbsent,
    KeyAlreadyExists,
    KeyStoreError,
    StorageError,
    ValidationError,
    VaultError,
)
from .key_store import KeyMaterial, KeyStore
from .models import Identity, Record, sort_records, validate_field
from .record_store import RecordStore
from .vault_service import Outcome, VaultService

__all__ = [
    "EncryptionService",
    "KeyMaterial",
    "KeyStore",
    "RecordStore",
    "VaultService",
    "Outcome",
    "Record",
    "Identity",
    "sort_records",
    "validate_field",
    # Errors
    "VaultError",
    "KeyAbsent",
    "KeyStoreError",
    "KeyAlreadyExists",
    "DecryptError",
    "MalformedKey",
    "ValidationError",
    "StorageError",
    "EmptyResult",
]
