"""
Vault Exception Classes
"""


class VaultError(Exception):
    """Base exception for vault operations"""
    pass


class KeyAbsent(VaultError):
    """Raised when no security key is available for an operation that needs one"""
    pass


class KeyStoreError(VaultError):
    """Raised when the key file cannot be written"""
    pass


class KeyAlreadyExists(KeyStoreError):
    """Raised when creating a key while one is already on disk"""
    pass


class DecryptError(VaultError):
    """Raised when a token is malformed or was not produced by the supplied key"""
    pass


class MalformedKey(DecryptError):
    """Raised when the key file does not hold a usable Fernet key"""
    pass


class ValidationError(VaultError):
    """Raised when a user-supplied name or username is rejected"""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class StorageError(VaultError):
    """Raised when the record database fails a statement"""
    pass


class EmptyResult(VaultError):
    """Raised when the vault, a search, or a selection yields nothing"""
    pass
