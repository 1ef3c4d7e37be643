"""AES-CBC parameter encryption for the Zalo web API."""

from zca.crypto.cipher import (
    ParamCipher,
    decrypt_params,
    decrypt_with_utf8_key,
    encrypt_params,
    encrypt_with_utf8_key,
    parse_plain,
)

__all__ = [
    "ParamCipher",
    "decrypt_params",
    "decrypt_with_utf8_key",
    "encrypt_params",
    "encrypt_with_utf8_key",
    "parse_plain",
]
