"""
Módulo de cifrado simétrico y asimétrico.
- RSA-OAEP (SHA-512): cifrado de bloques acotados con la clave pública
- AES-256-GCM: cifrado autenticado con clave derivada de una passphrase
- Formato AES: [nonce:12][ciphertext:variable][tag:16]
"""

import logging
import os
from typing import Callable, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from . import config
from .errors import (
    AuthenticationFailed,
    DecryptionFailed,
    EncryptionFailed,
    InputTooShort,
    PayloadTooLarge,
    TypeMismatch,
)
from .digest import to_bytes
from .kdf import derive_key

logger = logging.getLogger(__name__)

RandomSource = Callable[[int], bytes]


def _oaep() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA512()),
        algorithm=hashes.SHA512(),
        label=None,
    )



#  CIFRADO ASIMÉTRICO (RSA-OAEP)

def max_payload_size(public_key: rsa.RSAPublicKey) -> int:
    """
    Máximo de bytes que admite RSA-OAEP con SHA-512 para la clave.

    k - 2*hLen - 2, es decir 126 bytes para RSA-2048.
    """
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise TypeMismatch("Se esperaba un objeto RSAPublicKey")
    modulus_bytes = (public_key.key_size + 7) // 8
    return max(0, modulus_bytes - 2 * config.OAEP_HASH_SIZE - 2)


def encrypt_with_public_key(message: Union[str, bytes], public_key: rsa.RSAPublicKey) -> bytes:
    """
    Cifra un mensaje con RSA-OAEP (SHA-512).

    Solo cifra un bloque; trocear mensajes largos es cosa del llamante.

    Argumentos:
        message: mensaje (str se codifica en UTF-8)
        public_key: clave pública RSA del destinatario

    Returns:
        Ciphertext del tamaño del módulo

    Raises:
        PayloadTooLarge: si el mensaje supera max_payload_size
        EncryptionFailed: ante cualquier otro fallo
    """
    data = to_bytes(message, "message")
    limit = max_payload_size(public_key)
    if len(data) > limit:
        raise PayloadTooLarge(
            f"Mensaje de {len(data)} bytes (máximo para RSA-{public_key.key_size}: {limit})"
        )
    try:
        return public_key.encrypt(data, _oaep())
    except ValueError as e:
        raise EncryptionFailed(f"Error al cifrar con RSA-OAEP: {e}") from e


def decrypt_with_private_key(ciphertext: bytes, private_key: rsa.RSAPrivateKey) -> bytes:
    """
    Descifra un ciphertext RSA-OAEP (SHA-512).

    Raises:
        DecryptionFailed: siempre con el mismo mensaje, sea cual sea la causa
    """
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise TypeMismatch("Se esperaba un objeto RSAPrivateKey")
    ciphertext = to_bytes(ciphertext, "ciphertext")
    try:
        return private_key.decrypt(ciphertext, _oaep())
    except (ValueError, TypeError):
        raise DecryptionFailed("Error al descifrar") from None



#  CIFRADO SIMÉTRICO (AES-GCM)

def encrypt_aes(
    plaintext: Union[str, bytes],
    passphrase: Union[str, bytes],
    random_bytes: RandomSource = os.urandom,
) -> bytes:
    """
    Cifra datos con AES-256-GCM usando una clave derivada de la passphrase.

    Se genera un nonce nuevo en cada llamada y se antepone al resultado,
    así que el ciphertext es autocontenido. No se usan datos asociados.

    Argumentos:
        plaintext: datos a cifrar (str se codifica en UTF-8)
        passphrase: secreto del que se deriva la clave (core.kdf)
        random_bytes: fuente de aleatoriedad segura, os.urandom por defecto

    Returns:
        nonce(12) || ciphertext || tag(16)
    """
    data = to_bytes(plaintext, "plaintext")
    key = derive_key(passphrase)
    nonce = random_bytes(config.NONCE_SIZE)
    if not isinstance(nonce, bytes) or len(nonce) != config.NONCE_SIZE:
        raise EncryptionFailed(
            f"La fuente aleatoria no devolvió un nonce de {config.NONCE_SIZE} bytes"
        )
    aesgcm = AESGCM(key)
    try:
        sealed = aesgcm.encrypt(nonce, data, associated_data=None)
    except OverflowError as e:
        raise EncryptionFailed(f"Error al cifrar con AES-GCM: {e}") from e
    return nonce + sealed


def decrypt_aes(ciphertext: bytes, passphrase: Union[str, bytes]) -> bytes:
    """
    Descifra un blob generado por encrypt_aes.

    Raises:
        InputTooShort: si el blob no llega a contener el nonce
        AuthenticationFailed: si el tag no verifica; no distingue entre
            datos manipulados y passphrase incorrecta
    """
    ciphertext = to_bytes(ciphertext, "ciphertext")
    if len(ciphertext) < config.NONCE_SIZE:
        raise InputTooShort(
            f"Ciphertext de {len(ciphertext)} bytes (mínimo: {config.NONCE_SIZE})"
        )
    nonce, sealed = ciphertext[:config.NONCE_SIZE], ciphertext[config.NONCE_SIZE:]
    aesgcm = AESGCM(derive_key(passphrase))
    try:
        return aesgcm.decrypt(nonce, sealed, associated_data=None)
    except (InvalidTag, ValueError):
        raise AuthenticationFailed("Autenticación fallida") from None
