"""
Módulo core con funcionalidades criptográficas.

Módulos disponibles:
- config: constantes de seguridad y etiquetas PEM
- errors: jerarquía de excepciones
- digest: SHA-256 y HMAC-SHA256
- kdf: derivación de la clave AES a partir de una passphrase
- auth: hashing de contraseñas (bcrypt)
- keys: generación y serialización de claves RSA
- crypto: cifrado asimétrico (RSA-OAEP) y simétrico (AES-GCM)
- sign: firma digital (RSA PKCS#1 v1.5)
- log: configuración de logging para aplicaciones
"""

# Importar módulos para facilitar el uso
from . import config
from . import errors
from . import digest
from . import kdf
from . import auth
from . import keys
from . import crypto
from . import sign
from . import log

__all__ = ['config', 'errors', 'digest', 'kdf', 'auth', 'keys', 'crypto', 'sign', 'log']
