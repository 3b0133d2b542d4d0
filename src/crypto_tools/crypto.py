import base64
import os
from typing import Optional, Tuple, Type

from cryptography.hazmat.primitives import padding, hashes
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
import structlog

from crypto_tools.encoding import as_bytes, b64_decode_bytes
from crypto_tools.errors import (
    InvalidEncodingError,
    MissingPassphraseError,
    WrongKeyOrCorruptCiphertextError,
)


log = structlog.get_logger()

# OpenSSL "enc" / CryptoJS passphrase envelope: MAGIC || salt || AES-256-CBC ciphertext.
MAGIC = b"Salted__"
SALT_SIZE = 8
KEY_SIZE = 32
IV_SIZE = 16
BLOCK_SIZE = algorithms.AES.block_size  # bits

PASSPHRASE_SIZE = 16

# EVP_BytesToKey parameters. CryptoJS uses MD5 with a single round; changing
# either breaks compatibility with envelopes produced elsewhere.
KDF_HASH: Type[hashes.HashAlgorithm] = hashes.MD5
KDF_ITERATIONS = 1

WRONG_KEY_MESSAGE = "Wrong passphrase or corrupt ciphertext"


def generate_passphrase() -> str:
    """ Returns a random passphrase: 16 bytes from the OS CSPRNG as 32 lowercase hex chars.
    """
    return os.urandom(PASSPHRASE_SIZE).hex()


def _digest(algorithm: Type[hashes.HashAlgorithm], data: bytes) -> bytes:
    h = hashes.Hash(algorithm())
    h.update(data)
    return h.finalize()


def derive_key_and_iv(
    passphrase: bytes,
    salt: bytes,
    *,
    key_size: int = KEY_SIZE,
    iv_size: int = IV_SIZE,
    hash_algorithm: Type[hashes.HashAlgorithm] = KDF_HASH,
    iterations: int = KDF_ITERATIONS,
) -> Tuple[bytes, bytes]:
    """ Derives a key and IV from a passphrase and salt with OpenSSL's EVP_BytesToKey.
    Each round hashes the previous block, the passphrase and the salt, rehashing
    the result `iterations - 1` more times. Blocks are concatenated until there
    is enough material for the key followed by the IV.
    """
    if iterations < 1:
        raise ValueError(f"Invalid iteration count: {iterations}")

    derived = b""
    block = b""
    while len(derived) < key_size + iv_size:
        block = _digest(hash_algorithm, block + passphrase + salt)
        for _ in range(iterations - 1):
            block = _digest(hash_algorithm, block)
        derived += block

    return derived[:key_size], derived[key_size:key_size + iv_size]


def build_envelope(salt: bytes, ciphertext: bytes) -> bytes:
    if len(salt) != SALT_SIZE:
        raise ValueError(f"Salt must be {SALT_SIZE} bytes, got {len(salt)}")
    return MAGIC + salt + ciphertext


def parse_envelope(envelope: bytes) -> Tuple[bytes, bytes]:
    """ Splits an envelope into (salt, ciphertext).
    Envelopes without the magic header are rejected as corrupt.
    """
    header_size = len(MAGIC) + SALT_SIZE
    if len(envelope) < header_size or not envelope.startswith(MAGIC):
        raise WrongKeyOrCorruptCiphertextError(
            f"Ciphertext does not start with the {MAGIC.decode('ascii')} header"
        )

    ciphertext = envelope[header_size:]
    if not ciphertext or len(ciphertext) % (BLOCK_SIZE // 8):
        raise WrongKeyOrCorruptCiphertextError(
            "Ciphertext length is not a whole number of AES blocks"
        )
    return envelope[len(MAGIC):header_size], ciphertext


def _require_passphrase(passphrase: Optional[str]) -> bytes:
    if not passphrase:
        raise MissingPassphraseError("A passphrase is required for AES operations")
    return as_bytes(passphrase)


def encrypt(plaintext: str, passphrase: str) -> str:
    """ Encrypts the plaintext with AES-256-CBC and PKCS#7 padding.
    The key and IV are derived from the passphrase and a fresh random salt,
    so encrypting the same text twice never gives the same output.
    Returns the Base64 encoded Salted__ envelope.
    """
    passphrase_bytes = _require_passphrase(passphrase)
    plaintext_bytes = as_bytes(plaintext)

    salt = os.urandom(SALT_SIZE)
    key, iv = derive_key_and_iv(passphrase_bytes, salt)

    padder = padding.PKCS7(BLOCK_SIZE).padder()
    padded = padder.update(plaintext_bytes) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()

    log.debug(
        "encrypted",
        plaintext_len=len(plaintext_bytes),
        ciphertext_len=len(ciphertext),
    )
    return base64.b64encode(build_envelope(salt, ciphertext)).decode("ascii")


def decrypt(envelope_b64: str, passphrase: str) -> str:
    """ Decrypts a Base64 Salted__ envelope produced by `encrypt`, CryptoJS or
    `openssl enc -aes-256-cbc -md md5 -a -A`.
    Bad padding and non UTF-8 output both mean the passphrase is wrong or the
    data was damaged; the two cases cannot be told apart.
    """
    passphrase_bytes = _require_passphrase(passphrase)

    try:
        envelope = b64_decode_bytes(envelope_b64)
    except InvalidEncodingError as e:
        raise WrongKeyOrCorruptCiphertextError(f"Ciphertext is not valid Base64: {e}") from e

    salt, ciphertext = parse_envelope(envelope)
    key, iv = derive_key_and_iv(passphrase_bytes, salt)

    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()

    unpadder = padding.PKCS7(BLOCK_SIZE).unpadder()
    try:
        plaintext = unpadder.update(padded) + unpadder.finalize()
    except ValueError as e:
        log.debug("invalid padding bytes", ciphertext_len=len(ciphertext))
        raise WrongKeyOrCorruptCiphertextError(WRONG_KEY_MESSAGE) from e

    try:
        text = plaintext.decode("utf-8")
    except UnicodeDecodeError as e:
        log.debug("decrypted bytes are not utf-8", plaintext_len=len(plaintext))
        raise WrongKeyOrCorruptCiphertextError(WRONG_KEY_MESSAGE) from e

    log.debug("decrypted", ciphertext_len=len(ciphertext), plaintext_len=len(plaintext))
    return text
