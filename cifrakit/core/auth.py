"""
Módulo de hashing de contraseñas.
- bcrypt: hash lento y con sal para almacenar credenciales
- La sal y el coste van embebidos en el propio hash
"""

import logging
import re
from typing import Optional, Union

import bcrypt

from . import config
from .errors import EncodingError, InvalidInput, MalformedBlob

logger = logging.getLogger(__name__)

# $2b$10$ + 22 caracteres de sal + 31 de hash
_BCRYPT_HASH_RE = re.compile(rb"\$2[abxy]?\$(\d\d)\$[./A-Za-z0-9]{53}")


def _encode_password(password: str) -> bytes:
    if isinstance(password, bytes):
        pwd_bytes = password
    else:
        try:
            pwd_bytes = password.encode("utf-8")
        except (AttributeError, UnicodeEncodeError) as e:
            raise EncodingError(f"La contraseña no se puede codificar en UTF-8: {e}") from e
    if len(pwd_bytes) > config.BCRYPT_MAX_PASSWORD_BYTES:
        raise EncodingError(
            f"La contraseña ocupa {len(pwd_bytes)} bytes "
            f"(máximo: {config.BCRYPT_MAX_PASSWORD_BYTES})"
        )
    if b"\x00" in pwd_bytes:
        raise EncodingError("La contraseña no puede contener bytes NUL")
    return pwd_bytes


def _parse_hash(hashed: Union[str, bytes]) -> tuple[bytes, int]:
    """Valida el formato del hash y devuelve (hash_bytes, coste)."""
    if isinstance(hashed, str):
        try:
            hashed = hashed.encode("ascii")
        except UnicodeEncodeError:
            raise MalformedBlob("El hash contiene caracteres no ASCII") from None
    if not isinstance(hashed, bytes):
        raise MalformedBlob("El hash debe ser str o bytes")
    match = _BCRYPT_HASH_RE.fullmatch(hashed)
    if not match:
        raise MalformedBlob("El valor almacenado no es un hash bcrypt")
    return hashed, int(match.group(1))


def _check_rounds(rounds: Optional[int]) -> int:
    if rounds is None:
        return config.BCRYPT_ROUNDS
    if isinstance(rounds, bool) or not isinstance(rounds, int):
        raise InvalidInput(f"rounds debe ser un entero, no {type(rounds).__name__}")
    if not config.BCRYPT_MIN_ROUNDS <= rounds <= config.BCRYPT_MAX_ROUNDS:
        raise InvalidInput(
            f"Coste bcrypt {rounds} fuera de rango "
            f"({config.BCRYPT_MIN_ROUNDS}-{config.BCRYPT_MAX_ROUNDS})"
        )
    return rounds


# ==============================
#  HASH DE CONTRASEÑA
# ==============================
def hash_password(password: str, rounds: Optional[int] = None) -> bytes:
    """
    Genera el hash bcrypt de una contraseña.

    Cada llamada usa una sal nueva, así que dos hashes de la misma
    contraseña son distintos.

    Argumentos:
        password: contraseña en texto plano
        rounds: coste de bcrypt (por defecto config.BCRYPT_ROUNDS)

    Returns:
        Hash en formato $2b$<coste>$<sal><hash>

    Raises:
        EncodingError: si la contraseña supera 72 bytes o contiene NUL
        InvalidInput: si rounds no es un entero entre 4 y 31
    """
    pwd_bytes = _encode_password(password)
    salt = bcrypt.gensalt(rounds=_check_rounds(rounds))
    try:
        return bcrypt.hashpw(pwd_bytes, salt)
    except ValueError as e:
        raise EncodingError(f"bcrypt rechazó la contraseña: {e}") from e


# ==============================
#  VERIFICACIÓN
# ==============================
def verify_password(hashed: Union[str, bytes], password: str) -> bool:
    """
    Verifica una contraseña contra un hash bcrypt.

    Returns:
        True si coincide, False si no (una contraseña distinta es un
        resultado esperado, no un error)

    Raises:
        MalformedBlob: si hashed no es un hash bcrypt válido
    """
    hashed, _ = _parse_hash(hashed)
    try:
        pwd_bytes = _encode_password(password)
    except EncodingError:
        # bcrypt no puede haber generado un hash para esta contraseña
        return False
    try:
        return bcrypt.checkpw(pwd_bytes, hashed)
    except ValueError as e:
        raise MalformedBlob(f"Hash bcrypt inválido: {e}") from e


# ==============================
#  COSTE
# ==============================
def get_cost(hashed: Union[str, bytes]) -> int:
    """Devuelve el coste embebido en un hash bcrypt."""
    return _parse_hash(hashed)[1]


def needs_rehash(hashed: Union[str, bytes], rounds: Optional[int] = None) -> bool:
    """Indica si el hash se generó con un coste menor que el configurado."""
    target = _check_rounds(rounds)
    cost = get_cost(hashed)
    if cost < target:
        logger.debug("Hash con coste %d < %d, conviene rehashear", cost, target)
        return True
    return False
