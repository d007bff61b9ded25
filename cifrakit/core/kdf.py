"""
Derivación de la clave simétrica a partir de una passphrase.

derive_key es SHA-256 de la passphrase: determinista, rápida y sin sal.
Solo sirve para obtener la clave AES de core.crypto a partir de un secreto
que gestiona el llamante. No debe usarse para guardar contraseñas; para eso
está core.auth (bcrypt).
"""

from .digest import Data, create_hash


def derive_key(passphrase: Data) -> bytes:
    """
    Deriva una clave de 32 bytes (AES-256) de la passphrase.

    La misma passphrase produce siempre la misma clave.

    Argumentos:
        passphrase: secreto del llamante (str se codifica en UTF-8)

    Returns:
        Clave de KEY_SIZE bytes
    """
    return create_hash(passphrase)
