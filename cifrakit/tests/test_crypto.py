"""
Tests unitarios para el módulo crypto.py (RSA-OAEP y AES-GCM)
"""

import hashlib
import os

import pytest
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from cifrakit.core import config
from cifrakit.core.crypto import (
    decrypt_aes,
    decrypt_with_private_key,
    encrypt_aes,
    encrypt_with_public_key,
    max_payload_size,
)
from cifrakit.core.errors import (
    AuthenticationFailed,
    DecryptionFailed,
    EncryptionFailed,
    InputTooShort,
    InvalidInput,
    PayloadTooLarge,
)
from cifrakit.core.keys import generate_key_pair


# ==============================
#  FIXTURES
# ==============================
@pytest.fixture(scope="module")
def rsa_keypair():
    """Par de claves RSA-2048 para testing."""
    return generate_key_pair(2048)


@pytest.fixture(scope="module")
def other_keypair():
    """Segundo par RSA-2048, distinto del primero."""
    return generate_key_pair(2048)


@pytest.fixture
def sample_passphrase():
    """Passphrase de prueba."""
    return "correct horse"


# ==============================
#  TEST: RSA-OAEP
# ==============================
def test_rsa_hello(rsa_keypair):
    """Test: cifrar "hello" con la pública y descifrar con la privada."""
    private_key, public_key = rsa_keypair

    ciphertext = encrypt_with_public_key(b"hello", public_key)

    assert len(ciphertext) == 256
    assert decrypt_with_private_key(ciphertext, private_key) == b"hello"


def test_rsa_accepts_str(rsa_keypair):
    """Test: un str se cifra como UTF-8."""
    private_key, public_key = rsa_keypair
    ciphertext = encrypt_with_public_key("señal", public_key)
    assert decrypt_with_private_key(ciphertext, private_key) == "señal".encode("utf-8")


def test_rsa_is_randomized(rsa_keypair):
    """Test: OAEP produce ciphertexts distintos para el mismo mensaje."""
    _, public_key = rsa_keypair
    assert encrypt_with_public_key(b"hello", public_key) != encrypt_with_public_key(b"hello", public_key)


def test_max_payload_size(rsa_keypair):
    """Test: RSA-2048 con OAEP/SHA-512 admite 126 bytes."""
    _, public_key = rsa_keypair
    assert max_payload_size(public_key) == 256 - 2 * 64 - 2 == 126


@pytest.mark.parametrize("size", [0, 1, 125, 126])
def test_rsa_sizes_within_bound(rsa_keypair, size):
    """Test: cualquier tamaño hasta el límite hace round-trip."""
    private_key, public_key = rsa_keypair
    message = os.urandom(size)
    assert decrypt_with_private_key(encrypt_with_public_key(message, public_key), private_key) == message


def test_rsa_payload_too_large(rsa_keypair):
    """Test: un byte por encima del límite falla con PayloadTooLarge."""
    _, public_key = rsa_keypair
    with pytest.raises(PayloadTooLarge, match="126"):
        encrypt_with_public_key(b"x" * 127, public_key)


def test_rsa_wrong_private_key(rsa_keypair, other_keypair):
    """Test: descifrar con otra clave privada falla."""
    _, public_key = rsa_keypair
    other_private, _ = other_keypair

    ciphertext = encrypt_with_public_key(b"hello", public_key)
    with pytest.raises(DecryptionFailed):
        decrypt_with_private_key(ciphertext, other_private)


def test_rsa_errors_do_not_leak_cause(rsa_keypair, other_keypair):
    """Test: clave errónea, datos manipulados y longitud incorrecta dan el mismo error."""
    private_key, public_key = rsa_keypair
    other_private, _ = other_keypair
    ciphertext = encrypt_with_public_key(b"hello", public_key)

    tampered = bytearray(ciphertext)
    tampered[10] ^= 0x01

    messages = set()
    for key, data in [
        (other_private, ciphertext),
        (private_key, bytes(tampered)),
        (private_key, ciphertext[:-1]),
        (private_key, b""),
    ]:
        with pytest.raises(DecryptionFailed) as excinfo:
            decrypt_with_private_key(data, key)
        assert excinfo.value.__cause__ is None
        messages.add(str(excinfo.value))

    assert len(messages) == 1


# ==============================
#  TEST: AES-GCM
# ==============================
def test_aes_round_trip(sample_passphrase):
    """Test: cifrar y descifrar con la misma passphrase."""
    ciphertext = encrypt_aes(b"top secret", sample_passphrase)
    assert decrypt_aes(ciphertext, sample_passphrase) == b"top secret"


def test_aes_wrong_passphrase():
    """Test: "wrong horse" no descifra lo cifrado con "correct horse"."""
    ciphertext = encrypt_aes("top secret", "correct horse")
    with pytest.raises(AuthenticationFailed):
        decrypt_aes(ciphertext, "wrong horse")


def test_aes_layout(sample_passphrase):
    """Test: salida = nonce(12) || AES-GCM(sha256(passphrase)) sin AAD."""
    nonce = bytes(range(config.NONCE_SIZE))
    ciphertext = encrypt_aes(b"hola", sample_passphrase, random_bytes=lambda n: nonce[:n])

    key = hashlib.sha256(sample_passphrase.encode("utf-8")).digest()
    expected = nonce + AESGCM(key).encrypt(nonce, b"hola", None)

    assert ciphertext == expected
    assert len(ciphertext) == config.NONCE_SIZE + 4 + config.TAG_SIZE


def test_aes_fresh_nonce_per_call(sample_passphrase):
    """Test: dos cifrados del mismo texto difieren pero ambos descifran."""
    c1 = encrypt_aes(b"mismo texto", sample_passphrase)
    c2 = encrypt_aes(b"mismo texto", sample_passphrase)

    assert c1 != c2
    assert c1[:config.NONCE_SIZE] != c2[:config.NONCE_SIZE]
    assert decrypt_aes(c1, sample_passphrase) == decrypt_aes(c2, sample_passphrase) == b"mismo texto"


def test_aes_random_source_is_called_per_encryption(sample_passphrase):
    """Test: la fuente aleatoria inyectada se consulta en cada llamada."""
    calls = []

    def fake_random(n):
        calls.append(n)
        return len(calls).to_bytes(n, "big")

    c1 = encrypt_aes(b"a", sample_passphrase, random_bytes=fake_random)
    c2 = encrypt_aes(b"a", sample_passphrase, random_bytes=fake_random)

    assert calls == [config.NONCE_SIZE, config.NONCE_SIZE]
    assert c1[:config.NONCE_SIZE] != c2[:config.NONCE_SIZE]


def test_aes_bad_random_source(sample_passphrase):
    """Test: un nonce de longitud incorrecta se rechaza."""
    with pytest.raises(EncryptionFailed):
        encrypt_aes(b"a", sample_passphrase, random_bytes=lambda n: b"\x00" * 8)


def test_aes_every_bit_flip_is_detected(sample_passphrase):
    """Test: cambiar cualquier bit del nonce o del payload hace fallar el descifrado."""
    ciphertext = encrypt_aes(b"hello", sample_passphrase)

    for position in range(len(ciphertext) * 8):
        tampered = bytearray(ciphertext)
        tampered[position // 8] ^= 1 << (position % 8)
        with pytest.raises(AuthenticationFailed):
            decrypt_aes(bytes(tampered), sample_passphrase)


def test_aes_tamper_and_wrong_passphrase_indistinguishable(sample_passphrase):
    """Test: manipulación y passphrase errónea dan el mismo error y mensaje."""
    ciphertext = encrypt_aes(b"hello", sample_passphrase)
    tampered = bytearray(ciphertext)
    tampered[-1] ^= 0xFF

    with pytest.raises(AuthenticationFailed) as wrong_pass:
        decrypt_aes(ciphertext, "otra passphrase")
    with pytest.raises(AuthenticationFailed) as tampered_data:
        decrypt_aes(bytes(tampered), sample_passphrase)

    assert str(wrong_pass.value) == str(tampered_data.value)


@pytest.mark.parametrize("length", [0, 1, config.NONCE_SIZE - 1])
def test_aes_input_too_short(sample_passphrase, length):
    """Test: menos bytes que el nonce falla con InputTooShort."""
    with pytest.raises(InputTooShort):
        decrypt_aes(b"\x00" * length, sample_passphrase)


def test_aes_nonce_without_tag(sample_passphrase):
    """Test: solo el nonce (sin tag) no autentica."""
    with pytest.raises(AuthenticationFailed):
        decrypt_aes(b"\x00" * config.NONCE_SIZE, sample_passphrase)


@pytest.mark.parametrize("plaintext", [b"", b"a", os.urandom(1024 * 1024)])
def test_aes_arbitrary_lengths(sample_passphrase, plaintext):
    """Test: plaintexts vacíos y largos hacen round-trip."""
    ciphertext = encrypt_aes(plaintext, sample_passphrase)
    assert len(ciphertext) == config.NONCE_SIZE + len(plaintext) + config.TAG_SIZE
    assert decrypt_aes(ciphertext, sample_passphrase) == plaintext


@pytest.mark.parametrize("passphrase", ["", "contraseña🔐中文español", "a" * 1000, b"\x00\xff"])
def test_aes_special_passphrases(passphrase):
    """Test: passphrases vacías, Unicode, largas o binarias."""
    ciphertext = encrypt_aes(b"datos", passphrase)
    assert decrypt_aes(ciphertext, passphrase) == b"datos"


# ==============================
#  TEST: TIPOS DE ENTRADA
# ==============================
@pytest.mark.parametrize("value", [None, 5])
def test_aes_rejects_non_bytes(sample_passphrase, value):
    """Test: un int no se convierte en un buffer de ceros; None y int fallan con InvalidInput."""
    with pytest.raises(InvalidInput):
        encrypt_aes(value, sample_passphrase)
    with pytest.raises(InvalidInput):
        decrypt_aes(value, sample_passphrase)


@pytest.mark.parametrize("value", [None, 5])
def test_rsa_rejects_non_bytes(rsa_keypair, value):
    """Test: RSA-OAEP rechaza mensajes y ciphertexts que no son str ni bytes."""
    private_key, public_key = rsa_keypair
    with pytest.raises(InvalidInput):
        encrypt_with_public_key(value, public_key)
    with pytest.raises(InvalidInput):
        decrypt_with_private_key(value, private_key)
