# SafePass - Main Package
#
# Local credential vault: service passwords encrypted at rest in SQLite,
# copied to the clipboard on demand.

__version__ = "0.3.0"
__author__ = "SafePass Team"
__description__ = "Local password vault with clipboard delivery"

from .vault import (
    EncryptionService,
    KeyStore,
    Outcome,
    Record,
    RecordStore,
    VaultError,
    VaultService,
)

__all__ = [
    "__version__",
    "EncryptionService",
    "KeyStore",
    "Outcome",
    "Record",
    "RecordStore",
    "VaultError",
    "VaultService",
]
