"""
cifrakit: utilidades criptográficas.

Pares RSA y su serialización PEM, cifrado RSA-OAEP, hashing de contraseñas
con bcrypt, cifrado AES-GCM con passphrase, HMAC y firmas RSA.
"""

import logging

from .core.auth import hash_password, verify_password
from .core.crypto import (
    decrypt_aes,
    decrypt_with_private_key,
    encrypt_aes,
    encrypt_with_public_key,
)
from .core.digest import create_hash, create_mac, verify_mac
from .core.errors import CifrakitError
from .core.kdf import derive_key
from .core.keys import (
    decode_private,
    decode_public,
    encode_private,
    encode_public,
    generate_key_pair,
)
from .core.sign import sign_signature, verify_signature

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "CifrakitError",
    "create_hash",
    "create_mac",
    "verify_mac",
    "derive_key",
    "hash_password",
    "verify_password",
    "generate_key_pair",
    "encode_private",
    "decode_private",
    "encode_public",
    "decode_public",
    "encrypt_with_public_key",
    "decrypt_with_private_key",
    "encrypt_aes",
    "decrypt_aes",
    "sign_signature",
    "verify_signature",
]
