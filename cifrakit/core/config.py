"""
Configuración del toolkit.
- Constantes de seguridad (tamaños de clave, nonce, coste de bcrypt)
- Etiquetas de los sobres PEM que se generan y se aceptan
"""

import logging
import os

logger = logging.getLogger(__name__)



#  CONSTANTES RSA

MIN_KEY_BITS = 2048         # Tamaño mínimo aceptado para generar claves
DEFAULT_KEY_BITS = 2048
PUBLIC_EXPONENT = 65537
OAEP_HASH_SIZE = 64         # SHA-512 (bytes)


#  CONSTANTES AES-GCM

KEY_SIZE = 32               # 256 bits para AES
NONCE_SIZE = 12             # 96 bits, nonce estándar de GCM
TAG_SIZE = 16               # 128 bits de tag de autenticación


#  ETIQUETAS PEM

PRIVATE_KEY_LABEL = "RSA PRIVATE KEY"            # PKCS#1
PKCS8_PRIVATE_KEY_LABEL = "PRIVATE KEY"          # PKCS#8
ENCRYPTED_PRIVATE_KEY_LABEL = "ENCRYPTED PRIVATE KEY"
PUBLIC_KEY_LABEL = "RSA PUBLIC KEY"              # cuerpo SubjectPublicKeyInfo
PKIX_PUBLIC_KEY_LABEL = "PUBLIC KEY"


#  BCRYPT

BCRYPT_DEFAULT_ROUNDS = 10
BCRYPT_MIN_ROUNDS = 4
BCRYPT_MAX_ROUNDS = 31
BCRYPT_MAX_PASSWORD_BYTES = 72


def _rounds_from_env(default: int = BCRYPT_DEFAULT_ROUNDS) -> int:
    """Lee CIFRAKIT_BCRYPT_ROUNDS; ignora valores no válidos."""
    raw = os.getenv("CIFRAKIT_BCRYPT_ROUNDS")
    if raw is None:
        return default
    try:
        rounds = int(raw)
    except ValueError:
        logger.warning("CIFRAKIT_BCRYPT_ROUNDS=%r no es un entero, se usa %d", raw, default)
        return default
    if not BCRYPT_MIN_ROUNDS <= rounds <= BCRYPT_MAX_ROUNDS:
        logger.warning(
            "CIFRAKIT_BCRYPT_ROUNDS=%d fuera de rango [%d, %d], se usa %d",
            rounds, BCRYPT_MIN_ROUNDS, BCRYPT_MAX_ROUNDS, default,
        )
        return default
    return rounds


BCRYPT_ROUNDS = _rounds_from_env()
