"""
Módulo de generación y serialización de claves RSA.
- Generación de pares RSA con tamaño mínimo
- Clave privada: PEM "RSA PRIVATE KEY" (PKCS#1) al serializar;
  al cargar también se acepta "PRIVATE KEY" (PKCS#8)
- Clave pública: PEM "RSA PUBLIC KEY" con cuerpo SubjectPublicKeyInfo
- Los contenedores cifrados con contraseña se detectan y se rechazan
"""

import base64
import binascii
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from . import config
from .errors import (
    EncryptedContainerUnsupported,
    KeyGenError,
    MalformedKey,
    TypeMismatch,
    UnknownContainerType,
    UnsupportedKeyType,
)

logger = logging.getLogger(__name__)

PemData = Union[str, bytes]

_PEM_BLOCK_RE = re.compile(
    rb"-----BEGIN ([A-Z0-9 ]+)-----[ \t]*\r?\n(.*?)-----END \1-----",
    re.DOTALL,
)

_PRIVATE_LABELS = (
    config.PRIVATE_KEY_LABEL,
    config.PKCS8_PRIVATE_KEY_LABEL,
    config.ENCRYPTED_PRIVATE_KEY_LABEL,
)
_PUBLIC_LABELS = (config.PUBLIC_KEY_LABEL, config.PKIX_PUBLIC_KEY_LABEL)


#  SOBRE PEM

@dataclass(frozen=True)
class PemEnvelope:
    """Bloque PEM analizado: etiqueta, cabeceras RFC 1421 y cuerpo DER."""

    label: str
    der: bytes
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def encrypted(self) -> bool:
        """True si el bloque declara estar cifrado con contraseña."""
        if self.label == config.ENCRYPTED_PRIVATE_KEY_LABEL:
            return True
        return "ENCRYPTED" in self.headers.get("Proc-Type", "").upper()


def parse_pem(data: PemData) -> PemEnvelope:
    """
    Extrae el primer bloque PEM de los datos.

    Argumentos:
        data: texto PEM (str o bytes)

    Returns:
        PemEnvelope con la etiqueta, las cabeceras y el cuerpo decodificado

    Raises:
        MalformedKey: si no hay bloque PEM o el cuerpo no es Base64 válido
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    if not isinstance(data, (bytes, bytearray)):
        raise MalformedKey("Los datos de la clave deben ser str o bytes")

    match = _PEM_BLOCK_RE.search(bytes(data))
    if not match:
        raise MalformedKey("No se ha encontrado ningún bloque PEM")

    label = match.group(1).decode("ascii")
    try:
        lines = match.group(2).decode("ascii").splitlines()
    except UnicodeDecodeError:
        raise MalformedKey("El bloque PEM contiene caracteres no ASCII") from None

    # Cabeceras "Clave: valor" hasta la primera línea vacía
    headers: Dict[str, str] = {}
    if lines and ":" in lines[0]:
        while lines and lines[0].strip():
            name, _, value = lines.pop(0).partition(":")
            headers[name.strip()] = value.strip()

    body = "".join(line.strip() for line in lines)
    try:
        der = base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError):
        raise MalformedKey(f"Cuerpo Base64 inválido en el bloque {label}") from None
    if not der:
        raise MalformedKey(f"El bloque {label} está vacío")

    return PemEnvelope(label=label, der=der, headers=headers)


def _pem_encode(label: str, der: bytes) -> bytes:
    b64 = base64.b64encode(der).decode("ascii")
    lines = [b64[i:i + 64] for i in range(0, len(b64), 64)]
    text = f"-----BEGIN {label}-----\n" + "\n".join(lines) + f"\n-----END {label}-----\n"
    return text.encode("ascii")


def _reject_encrypted(envelope: PemEnvelope) -> None:
    if envelope.encrypted:
        logger.warning("Contenedor %s cifrado con contraseña rechazado", envelope.label)
        raise EncryptedContainerUnsupported(
            f"El contenedor {envelope.label} está cifrado con contraseña y no se puede abrir"
        )



#  GENERACIÓN DE CLAVES

def generate_key_pair(bits: int = config.DEFAULT_KEY_BITS) -> tuple[rsa.RSAPrivateKey, rsa.RSAPublicKey]:
    """
    Genera un par de claves RSA (privada y pública).

    Argumentos:
        bits: tamaño del módulo en bits (mínimo config.MIN_KEY_BITS)

    Returns:
        Tupla (clave_privada, clave_pública)

    Raises:
        KeyGenError: si bits no es un entero, es menor que el mínimo
            o la generación falla
    """
    if not isinstance(bits, int) or isinstance(bits, bool):
        raise KeyGenError(f"El tamaño de clave debe ser un entero, no {type(bits).__name__}")
    if bits < config.MIN_KEY_BITS:
        logger.warning("Tamaño de clave %d rechazado (mínimo %d)", bits, config.MIN_KEY_BITS)
        raise KeyGenError(
            f"Tamaño de clave inseguro: {bits} bits (mínimo: {config.MIN_KEY_BITS})"
        )

    try:
        private_key = rsa.generate_private_key(
            public_exponent=config.PUBLIC_EXPONENT,
            key_size=bits,
        )
    except (ValueError, UnsupportedAlgorithm) as e:
        raise KeyGenError(f"Error al generar la clave RSA de {bits} bits: {e}") from e

    logger.debug("Par RSA de %d bits generado", bits)
    return private_key, private_key.public_key()


def public_key_of(private_key: rsa.RSAPrivateKey) -> rsa.RSAPublicKey:
    """Devuelve la clave pública asociada a una clave privada RSA."""
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise TypeMismatch("Se esperaba un objeto RSAPrivateKey")
    return private_key.public_key()



#  CLAVE PRIVADA

def encode_private(private_key: rsa.RSAPrivateKey) -> bytes:
    """
    Convierte la clave privada RSA a PEM "RSA PRIVATE KEY" (PKCS#1, sin cifrar).
    """
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise TypeMismatch("La clave privada debe ser un objeto RSAPrivateKey")
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )


def decode_private(data: PemData) -> rsa.RSAPrivateKey:
    """
    Carga una clave privada RSA desde PEM.

    El formato se elige por la etiqueta del sobre:
        - "RSA PRIVATE KEY": PKCS#1
        - "PRIVATE KEY": PKCS#8, que debe contener una clave RSA

    Raises:
        MalformedKey: si los datos no se pueden parsear
        EncryptedContainerUnsupported: si el contenedor está cifrado
        UnsupportedKeyType: si la clave no es RSA
        TypeMismatch: si el sobre contiene una clave pública
        UnknownContainerType: si la etiqueta no es de clave
    """
    envelope = parse_pem(data)
    _reject_encrypted(envelope)

    if envelope.label in (config.PRIVATE_KEY_LABEL, config.PKCS8_PRIVATE_KEY_LABEL):
        try:
            # Se reconstruye el PEM con su etiqueta: cryptography elige PKCS#1 o
            # PKCS#8 por la etiqueta y rechaza un cuerpo del otro formato
            key = serialization.load_pem_private_key(
                _pem_encode(envelope.label, envelope.der), password=None,
            )
        except TypeError:
            # PKCS#8 cifrado sin etiqueta ENCRYPTED
            raise EncryptedContainerUnsupported(
                f"El contenedor {envelope.label} está cifrado con contraseña"
            ) from None
        except UnsupportedAlgorithm as e:
            raise UnsupportedKeyType(f"Algoritmo de clave no soportado: {e}") from e
        except ValueError as e:
            raise MalformedKey(f"No se pudo parsear el bloque {envelope.label}: {e}") from e
    elif envelope.label in _PUBLIC_LABELS:
        raise TypeMismatch(f"El bloque {envelope.label} contiene una clave pública, no privada")
    else:
        raise UnknownContainerType(f"Tipo de bloque no soportado: {envelope.label}")

    if not isinstance(key, rsa.RSAPrivateKey):
        raise UnsupportedKeyType(
            f"El bloque {envelope.label} contiene una clave {type(key).__name__}, no RSA"
        )

    logger.debug("Clave privada RSA de %d bits cargada (%s)", key.key_size, envelope.label)
    return key



#  CLAVE PÚBLICA

def encode_public(public_key: rsa.RSAPublicKey) -> bytes:
    """
    Convierte la clave pública RSA a PEM "RSA PUBLIC KEY" (cuerpo SubjectPublicKeyInfo).
    """
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise TypeMismatch("La clave pública debe ser un objeto RSAPublicKey")
    der = public_key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return _pem_encode(config.PUBLIC_KEY_LABEL, der)


def decode_public(data: PemData) -> rsa.RSAPublicKey:
    """
    Carga una clave pública RSA desde PEM ("RSA PUBLIC KEY" o "PUBLIC KEY").

    El cuerpo tiene que ser SubjectPublicKeyInfo; un PKCS#1 se rechaza.

    Raises:
        MalformedKey: si los datos no se pueden parsear
        EncryptedContainerUnsupported: si el contenedor está cifrado
        UnsupportedKeyType: si la clave no es RSA
        TypeMismatch: si el sobre contiene una clave privada
        UnknownContainerType: si la etiqueta no es de clave
    """
    envelope = parse_pem(data)
    _reject_encrypted(envelope)

    if envelope.label in _PUBLIC_LABELS:
        try:
            # El cuerpo debe ser SubjectPublicKeyInfo con cualquiera de las dos etiquetas
            key = serialization.load_pem_public_key(
                _pem_encode(config.PKIX_PUBLIC_KEY_LABEL, envelope.der),
            )
        except UnsupportedAlgorithm as e:
            raise UnsupportedKeyType(f"Algoritmo de clave no soportado: {e}") from e
        except ValueError as e:
            raise MalformedKey(f"No se pudo parsear el bloque {envelope.label}: {e}") from e
    elif envelope.label in _PRIVATE_LABELS:
        raise TypeMismatch(f"El bloque {envelope.label} contiene una clave privada, no pública")
    else:
        raise UnknownContainerType(f"Tipo de bloque no soportado: {envelope.label}")

    if not isinstance(key, rsa.RSAPublicKey):
        raise UnsupportedKeyType(
            f"El bloque {envelope.label} contiene una clave {type(key).__name__}, no RSA"
        )

    logger.debug("Clave pública RSA de %d bits cargada (%s)", key.key_size, envelope.label)
    return key
