"""
Módulo de resumen y autenticación de mensajes.
- SHA-256: hash de un solo sentido
- HMAC-SHA256: código de autenticación con clave, en Base64
"""

import base64
import hashlib
import hmac
from typing import Union

from .errors import InvalidInput

Data = Union[str, bytes]


def to_bytes(data: Data, name: str = "data") -> bytes:
    """str se codifica en UTF-8; bytes, bytearray y memoryview se copian."""
    if isinstance(data, str):
        try:
            return data.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidInput(f"{name} no se puede codificar en UTF-8: {e}") from e
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise InvalidInput(f"{name} debe ser str o bytes, no {type(data).__name__}")


def create_hash(data: Data) -> bytes:
    """
    Calcula el SHA-256 de los datos.

    Argumentos:
        data: datos a resumir (str se codifica en UTF-8)

    Returns:
        Digest de 32 bytes
    """
    return hashlib.sha256(to_bytes(data)).digest()


def create_mac(message: Data, secret: Data) -> str:
    """
    Calcula HMAC-SHA256 de un mensaje con la clave dada.

    Sirve para tokens a prueba de manipulación, no para confidencialidad.
    Mensaje o clave vacíos son entradas válidas.

    Returns:
        MAC de 32 bytes codificado en Base64 estándar
    """
    tag = hmac.new(to_bytes(secret, "secret"), to_bytes(message, "message"), hashlib.sha256).digest()
    return base64.b64encode(tag).decode("ascii")


def verify_mac(message: Data, secret: Data, mac: str) -> bool:
    """Comprueba un MAC generado por create_mac en tiempo constante."""
    if not isinstance(mac, str):
        return False
    expected = create_mac(message, secret)
    try:
        given = mac.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return hmac.compare_digest(expected.encode("ascii"), given)
