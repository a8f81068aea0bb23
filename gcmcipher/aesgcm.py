"""AES-GCM authenticated encryption (NIST SP 800-38D)."""

from __future__ import annotations

import hmac
import os

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from gcmcipher.ghash import BLOCK_SIZE, GHash

A_MAX = 1 << 36
"""Maximum length of associated data."""

P_MAX = 1 << 36
"""Maximum length of plaintext."""

C_MAX = (1 << 36) + 16
"""Maximum length of ciphertext."""

TAG_SIZE = 16


class AeadError(Exception):
    """Opaque failure of an AEAD operation."""

    def __init__(self, message: str = "aead error") -> None:
        super().__init__(message)


def _xor(data: bytes, keystream: bytes) -> bytes:
    length = len(data)
    value = int.from_bytes(data, "big") ^ int.from_bytes(keystream[:length], "big")
    return value.to_bytes(length, "big")


class AesGcm:
    """AES-GCM over any AES key size with a configurable nonce size."""

    KEY_SIZES: tuple[int, ...] = (16, 24, 32)

    def __init__(self, key: bytes, nonce_size: int = 12) -> None:
        key = bytes(key)
        if len(key) not in self.KEY_SIZES:
            raise ValueError(f"invalid key length {len(key)}; expected one of {self.KEY_SIZES}")
        if nonce_size < 1:
            raise ValueError("nonce size must be positive")
        self.nonce_size = nonce_size
        self._cipher = Cipher(algorithms.AES(key), modes.ECB())
        self._ghash = GHash(self._encrypt_blocks(bytes(BLOCK_SIZE)))

    @classmethod
    def generate_key(cls, key_size: int | None = None) -> bytes:
        """Return a random key of the given (or the class's only) size."""
        if key_size is None:
            if len(cls.KEY_SIZES) != 1:
                raise ValueError("a key size must be given")
            key_size = cls.KEY_SIZES[0]
        if key_size not in cls.KEY_SIZES:
            raise ValueError(f"invalid key size {key_size}; expected one of {cls.KEY_SIZES}")
        return os.urandom(key_size)

    def generate_nonce(self) -> bytes:
        """Return a random nonce of this cipher's nonce size."""
        return os.urandom(self.nonce_size)

    def _encrypt_blocks(self, data: bytes) -> bytes:
        encryptor = self._cipher.encryptor()
        return encryptor.update(data) + encryptor.finalize()

    def _check_nonce(self, nonce: bytes) -> bytes:
        nonce = bytes(nonce)
        if len(nonce) != self.nonce_size:
            raise ValueError(f"nonce must be {self.nonce_size} bytes, got {len(nonce)}")
        return nonce

    def _initial_counter(self, nonce: bytes) -> bytes:
        if self.nonce_size == 12:
            return nonce + b"\x00\x00\x00\x01"
        ghash = self._ghash.copy()
        ghash.update_padded(nonce)
        ghash.update([bytes(8) + (self.nonce_size * 8).to_bytes(8, "big")])
        return ghash.finalize()

    def _apply_keystream(self, j0: bytes, data: bytes) -> bytes:
        count = -(-len(data) // BLOCK_SIZE)
        prefix, counter = j0[:12], int.from_bytes(j0[12:], "big")
        counters = b"".join(
            prefix + ((counter + i) & 0xFFFFFFFF).to_bytes(4, "big") for i in range(1, count + 1)
        )
        return _xor(data, self._encrypt_blocks(counters))

    def _compute_tag(self, mask: bytes, associated_data: bytes, ciphertext: bytes) -> bytes:
        ghash = self._ghash.copy()
        ghash.update_padded(associated_data)
        ghash.update_padded(ciphertext)
        lengths = (len(associated_data) * 8).to_bytes(8, "big") + (len(ciphertext) * 8).to_bytes(8, "big")
        ghash.update([lengths])
        return _xor(ghash.finalize(), mask)

    def encrypt_detached(
        self, nonce: bytes, plaintext: bytes, associated_data: bytes = b""
    ) -> tuple[bytes, bytes]:
        """Encrypt and return (ciphertext, tag)."""
        nonce = self._check_nonce(nonce)
        plaintext = bytes(plaintext)
        associated_data = bytes(associated_data)
        if len(plaintext) > P_MAX or len(associated_data) > A_MAX:
            raise AeadError()
        j0 = self._initial_counter(nonce)
        mask = self._encrypt_blocks(j0)
        ciphertext = self._apply_keystream(j0, plaintext)
        return ciphertext, self._compute_tag(mask, associated_data, ciphertext)

    def decrypt_detached(
        self, nonce: bytes, ciphertext: bytes, tag: bytes, associated_data: bytes = b""
    ) -> bytes:
        """Verify the tag and return the plaintext; raise AeadError on failure."""
        nonce = self._check_nonce(nonce)
        ciphertext = bytes(ciphertext)
        associated_data = bytes(associated_data)
        tag = bytes(tag)
        if len(ciphertext) > C_MAX or len(associated_data) > A_MAX or len(tag) != TAG_SIZE:
            raise AeadError()
        j0 = self._initial_counter(nonce)
        mask = self._encrypt_blocks(j0)
        expected = self._compute_tag(mask, associated_data, ciphertext)
        if not hmac.compare_digest(expected, tag):
            raise AeadError()
        return self._apply_keystream(j0, ciphertext)

    def encrypt(self, nonce: bytes, plaintext: bytes, associated_data: bytes = b"") -> bytes:
        """Encrypt and return the ciphertext with the tag appended."""
        ciphertext, tag = self.encrypt_detached(nonce, plaintext, associated_data)
        return ciphertext + tag

    def decrypt(self, nonce: bytes, ciphertext: bytes, associated_data: bytes = b"") -> bytes:
        """Decrypt ciphertext with an appended tag."""
        ciphertext = bytes(ciphertext)
        if len(ciphertext) < TAG_SIZE:
            raise AeadError()
        body, tag = ciphertext[:-TAG_SIZE], ciphertext[-TAG_SIZE:]
        return self.decrypt_detached(nonce, body, tag, associated_data)


class Aes128Gcm(AesGcm):
    """AES-GCM with a 128-bit key and 96-bit nonce."""

    KEY_SIZES = (16,)

    def __init__(self, key: bytes) -> None:
        super().__init__(key, 12)


class Aes256Gcm(AesGcm):
    """AES-GCM with a 256-bit key and 96-bit nonce."""

    KEY_SIZES = (32,)

    def __init__(self, key: bytes) -> None:
        super().__init__(key, 12)