# SafePass - Vault Encryption Service
#
# Security key -> Fernet (AES-128-CBC + HMAC-SHA256)
# Each password is stored as one self-contained Fernet token:
# version | timestamp | IV | ciphertext | HMAC, URL-safe base64.

import logging
from typing import Union

from cryptography.fernet import Fernet, InvalidToken

from .exceptions import DecryptError, MalformedKey

logger = logging.getLogger(__name__)

KeyLike = Union[bytes, bytearray, memoryview]


class EncryptionService:
    """
    Handles encryption/decryption for vault passwords.

    Flow:
    1. A single Fernet key is generated once and kept in the key file
    2. Each password is encrypted into a token (fresh IV per call)
    3. Decryption verifies the HMAC before returning anything, so a
       wrong key and a damaged token both fail the same typed way
    """

    KEY_LENGTH = 44  # 32 random bytes, URL-safe base64

    @staticmethod
    def generate_key() -> bytes:
        """Generate a fresh Fernet key."""
        return Fernet.generate_key()

    @staticmethod
    def _fernet(key: KeyLike) -> Fernet:
        try:
            return Fernet(bytes(key))
        except (ValueError, TypeError) as e:
            # binascii.Error is a ValueError subclass
            raise MalformedKey("Security key file is not a valid Fernet key") from e

    @staticmethod
    def encrypt(plaintext: Union[str, bytes], key: KeyLike) -> str:
        """
        Encrypt a password into a Fernet token.

        Args:
            plaintext: Password or secret to encrypt
            key: Key material from the key file

        Returns:
            Token as ASCII text, ready for a TEXT column

        Raises:
            MalformedKey: If the key itself is malformed (nothing could
                ever decrypt the result)
        """
        if isinstance(plaintext, str):
            plaintext = plaintext.encode('utf-8')

        token = EncryptionService._fernet(key).encrypt(plaintext)
        return token.decode('ascii')

    @staticmethod
    def decrypt(token: Union[str, bytes], key: KeyLike) -> bytes:
        """
        Decrypt a Fernet token.

        Args:
            token: Token produced by encrypt()
            key: Key material from the key file

        Returns:
            Original plaintext bytes

        Raises:
            DecryptError: Wrong key, corrupted or malformed token
        """
        fernet = EncryptionService._fernet(key)
        try:
            return fernet.decrypt(token)
        except (InvalidToken, ValueError, TypeError) as e:
            logger.debug("Token rejected: %s", type(e).__name__)
            raise DecryptError("Invalid security key or corrupted token") from e

    @staticmethod
    def decrypt_text(token: Union[str, bytes], key: KeyLike) -> str:
        """Decrypt a token and decode the plaintext as UTF-8."""
        plaintext = EncryptionService.decrypt(token, key)
        try:
            return plaintext.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecryptError("Decrypted password is not valid UTF-8") from e
