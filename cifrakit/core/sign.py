"""
Módulo de firma digital.
- RSA PKCS#1 v1.5: firma determinista del digest
- SHA-256: función hash criptográfica
- Verificación de integridad y autenticidad
"""

import logging
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .digest import to_bytes
from .errors import MalformedSignature, TypeMismatch

logger = logging.getLogger(__name__)


#  FIRMA DIGITAL (PKCS#1 v1.5)

def sign_signature(private_key: rsa.RSAPrivateKey, data: Union[str, bytes]) -> bytes:
    """
    Firma los datos con RSA PKCS#1 v1.5 sobre SHA-256.

    Argumentos:
        private_key: clave privada RSA del firmante
        data: datos a firmar (str se codifica en UTF-8)

    Returns:
        Firma digital (tamaño igual al del módulo, 256 bytes para RSA-2048)
    """
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise TypeMismatch("Se esperaba un objeto RSAPrivateKey")
    return private_key.sign(to_bytes(data), padding.PKCS1v15(), hashes.SHA256())


def verify_signature(public_key: rsa.RSAPublicKey, data: Union[str, bytes],
                     signature: bytes) -> bool:
    """
    Verifica una firma RSA PKCS#1 v1.5 / SHA-256.

    Argumentos:
        public_key: clave pública RSA del firmante
        data: datos originales que fueron firmados
        signature: firma a verificar

    Returns:
        True si la firma es válida, False si no (datos modificados o
        clave distinta)

    Raises:
        MalformedSignature: si la firma no es bytes o su longitud no
            coincide con el tamaño de la clave
    """
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise TypeMismatch("Se esperaba un objeto RSAPublicKey")
    valid, error = validate_signature_format(signature, public_key.key_size)
    if not valid:
        raise MalformedSignature(error)

    try:
        public_key.verify(bytes(signature), to_bytes(data), padding.PKCS1v15(), hashes.SHA256())
        return True
    except InvalidSignature:
        logger.debug("Firma RSA-%d no válida", public_key.key_size)
        return False



#  FUNCIONES DE VALIDACIÓN

def validate_signature_format(signature: bytes, key_size: int) -> tuple[bool, Optional[str]]:
    """
    Valida que una firma tenga el formato correcto antes de verificarla

    Argumentos:
        signature: firma digital a validar
        key_size: tamaño de la clave RSA en bits

    Returns:
        Tupla (es_válida, mensaje_error)
    """
    expected_size = (key_size + 7) // 8

    if not isinstance(signature, (bytes, bytearray)):
        return False, "La firma debe ser de tipo bytes"

    if not signature:
        return False, "La firma está vacía"

    if len(signature) != expected_size:
        return False, f"Tamaño incorrecto: esperado {expected_size} bytes, recibido {len(signature)} bytes"

    return True, None
