"""
Parameter cipher — AES-CBC/PKCS#7 under the per-session key.

Wire format: base64(AES-CBC(key, iv=0^16, pkcs7(json(params)))). The IV is
fixed at zero; the server rejects anything else, so it is kept as is.
"""

import base64
import binascii
import json
from typing import Any, Union
from urllib.parse import unquote

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from zca.errors import DecryptError, InvalidInputError, Result

BLOCK_SIZE = 16
ZERO_IV = bytes(BLOCK_SIZE)
KEY_SIZES = (16, 24, 32)

Params = Union[dict[str, Any], str]


def _cipher(key: bytes) -> Cipher:
    if len(key) not in KEY_SIZES:
        raise ValueError(f"unsupported AES key length: {len(key)} bytes")
    return Cipher(algorithms.AES(key), modes.CBC(ZERO_IV))


def aes_cbc_encrypt(key: bytes, plaintext: bytes) -> bytes:
    padder = padding.PKCS7(BLOCK_SIZE * 8).padder()
    padded = padder.update(plaintext) + padder.finalize()
    encryptor = _cipher(key).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


def aes_cbc_decrypt(key: bytes, ciphertext: bytes) -> bytes:
    """Raises ValueError on a bad key, a partial block, or invalid padding."""
    if not ciphertext or len(ciphertext) % BLOCK_SIZE:
        raise ValueError(f"ciphertext length {len(ciphertext)} is not a multiple of {BLOCK_SIZE}")
    decryptor = _cipher(key).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()
    unpadder = padding.PKCS7(BLOCK_SIZE * 8).unpadder()
    return unpadder.update(padded) + unpadder.finalize()


def serialize_params(params: dict[str, Any]) -> str:
    """Compact JSON, non-ASCII kept as UTF-8, key order preserved. NaN and Infinity are rejected."""
    return json.dumps(params, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def _decode_key(symmetric_key: str) -> bytes:
    return base64.b64decode(symmetric_key, validate=True)


def encrypt_params(symmetric_key: str, params: Params) -> Result[str]:
    """Encrypt a parameter mapping (or pre-serialized JSON text) into the base64 envelope string."""
    if isinstance(params, str):
        plaintext = params
    else:
        try:
            plaintext = serialize_params(params)
        except (TypeError, ValueError) as e:
            return Result.failure(InvalidInputError(f"Failed to encode params: {e}"))
    if not plaintext:
        return Result.failure(InvalidInputError("Nothing to encrypt"))

    try:
        key = _decode_key(symmetric_key)
    except (binascii.Error, ValueError):
        return Result.failure(InvalidInputError("Invalid secret key encoding"))

    try:
        ciphertext = aes_cbc_encrypt(key, plaintext.encode("utf-8"))
    except ValueError as e:
        return Result.failure(InvalidInputError(f"Failed to encrypt params: {e}"))
    return Result.success(base64.b64encode(ciphertext).decode("ascii"))


def decrypt_text(symmetric_key: str, ciphertext: str) -> Result[str]:
    """Decrypt a base64 envelope string to its UTF-8 plaintext."""
    try:
        key = _decode_key(symmetric_key)
    except (binascii.Error, ValueError):
        return Result.failure(DecryptError("Invalid secret key encoding"))
    try:
        raw = base64.b64decode(ciphertext, validate=True)
    except (binascii.Error, ValueError):
        return Result.failure(DecryptError("Ciphertext is not valid base64"))
    try:
        plaintext = aes_cbc_decrypt(key, raw)
    except ValueError as e:
        return Result.failure(DecryptError(f"Decryption failed: {e}"))
    try:
        return Result.success(plaintext.decode("utf-8"))
    except UnicodeDecodeError:
        return Result.failure(DecryptError("Decrypted payload is not UTF-8"))


def parse_plain(text: Union[str, bytes]) -> Result[Any]:
    """Parse a plaintext JSON body. Never attempts decryption."""
    try:
        return Result.success(json.loads(text))
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
        return Result.failure(DecryptError(f"Invalid JSON: {e}"))


def decrypt_params(symmetric_key: str, ciphertext: str) -> Result[Any]:
    """Decrypt a base64 envelope string and parse the JSON inside it."""
    text = decrypt_text(symmetric_key, ciphertext)
    if not text.ok:
        return text
    return parse_plain(text.value)  # type: ignore[arg-type]


def encrypt_with_utf8_key(key: str, plaintext: str, output_format: str = "base64", uppercase: bool = False) -> Result[str]:
    """AES-CBC with a raw UTF-8 key (e.g. the 32-char login key). output_format is "hex" or "base64"."""
    if not plaintext:
        return Result.failure(InvalidInputError("Nothing to encrypt"))
    if output_format not in ("hex", "base64"):
        return Result.failure(InvalidInputError(f"Unknown output format: {output_format}"))
    try:
        ciphertext = aes_cbc_encrypt(key.encode("utf-8"), plaintext.encode("utf-8"))
    except ValueError as e:
        return Result.failure(InvalidInputError(f"Failed to encrypt: {e}"))
    encoded = ciphertext.hex() if output_format == "hex" else base64.b64encode(ciphertext).decode("ascii")
    return Result.success(encoded.upper() if uppercase else encoded)


def decrypt_with_utf8_key(key: str, ciphertext: str, input_format: str = "base64") -> Result[str]:
    """Inverse of encrypt_with_utf8_key. The input is URL-decoded first, as servers return it quoted."""
    if not ciphertext:
        return Result.failure(DecryptError("Nothing to decrypt"))
    data = unquote(ciphertext)
    try:
        raw = bytes.fromhex(data) if input_format == "hex" else base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        return Result.failure(DecryptError(f"Ciphertext is not valid {input_format}"))
    try:
        return Result.success(aes_cbc_decrypt(key.encode("utf-8"), raw).decode("utf-8"))
    except ValueError as e:
        return Result.failure(DecryptError(f"Decryption failed: {e}"))


class ParamCipher:
    """Binds the session key so endpoint code never touches it."""

    __slots__ = ("_key",)

    def __init__(self, symmetric_key: str):
        self._key = symmetric_key

    def __repr__(self) -> str:
        return "ParamCipher(<key hidden>)"

    def encrypt(self, params: Params) -> Result[str]:
        return encrypt_params(self._key, params)

    def decrypt(self, ciphertext: str) -> Result[Any]:
        return decrypt_params(self._key, ciphertext)
