"""
Excepciones del toolkit.

Todas heredan de CifrakitError. Los fallos de descifrado y autenticación
usan un único tipo por categoría y un mensaje fijo, sin indicar qué
comprobación concreta ha fallado.
"""


class CifrakitError(Exception):
    """Excepción base de cifrakit."""


class InvalidInput(CifrakitError, TypeError):
    """Argumento de tipo o valor no admitido (p. ej. None donde se esperan bytes)."""


#  GENERACIÓN DE CLAVES

class KeyGenError(CifrakitError):
    """Tamaño de clave no permitido o fallo al generar el par RSA."""


#  CÓDEC DE CLAVES

class KeyFormatError(CifrakitError):
    """Base de los errores de serialización/parseo de claves."""


class MalformedKey(KeyFormatError):
    """Los bytes no contienen un bloque PEM/DER parseable."""


class UnsupportedKeyType(KeyFormatError):
    """El contenedor es válido pero la clave no es RSA."""


class UnknownContainerType(KeyFormatError):
    """La etiqueta del sobre PEM no es ninguna de las reconocidas."""


class EncryptedContainerUnsupported(KeyFormatError):
    """El contenedor declara estar cifrado con contraseña."""


class TypeMismatch(KeyFormatError):
    """El valor no es del tipo de clave esperado (p. ej. pública en lugar de privada)."""


#  FIRMA

class MalformedSignature(CifrakitError):
    """La firma no tiene la estructura esperada (tipo o longitud)."""


#  CIFRADO

class PayloadTooLarge(CifrakitError):
    """El mensaje supera el máximo que admite RSA-OAEP para la clave."""


class EncryptionFailed(CifrakitError):
    """Fallo interno al cifrar."""


class DecryptionFailed(CifrakitError):
    """Descifrado RSA fallido (clave errónea o datos corruptos)."""


class AuthenticationFailed(CifrakitError):
    """El tag AES-GCM no verifica (datos manipulados o passphrase errónea)."""


class InputTooShort(CifrakitError):
    """El ciphertext es más corto que el nonce."""


#  CONTRASEÑAS

class EncodingError(CifrakitError):
    """La contraseña no se puede representar para bcrypt."""


class MalformedBlob(CifrakitError):
    """El hash almacenado no es un hash bcrypt válido."""
