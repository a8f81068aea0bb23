# gcmcipher

AES-GCM authenticated encryption with associated data (AEAD), following
NIST SP 800-38D.

The package has two modules:

- `gcmcipher.aesgcm`: the ciphers `AesGcm`, `Aes128Gcm` and `Aes256Gcm`,
  the exception `AeadError`, and the limits `A_MAX`, `P_MAX`, `C_MAX`
  and `TAG_SIZE`.
- `gcmcipher.ghash`: the `GHash` universal hash and `BLOCK_SIZE`.

The AES block cipher itself comes from the `cryptography` package. Counter
mode, GHASH and the tag are computed in this package.

## The ciphers

- `Aes128Gcm(key)`: a 16-byte key and a 12-byte nonce.
- `Aes256Gcm(key)`: a 32-byte key and a 12-byte nonce.
- `AesGcm(key, nonce_size=12)`: a 16-, 24- or 32-byte key and a nonce of
  any positive length. A 12-byte nonce is used directly as the start of
  the counter. A nonce of any other length is first run through GHASH, as
  the standard requires. The chosen length is kept in `nonce_size`.

A key of the wrong length raises `ValueError`.

## Encrypting and decrypting

```python
from gcmcipher.aesgcm import Aes256Gcm

key = Aes256Gcm.generate_key()         # 32 random bytes
cipher = Aes256Gcm(key)

nonce = cipher.generate_nonce()        # 12 random bytes; never reuse with the same key
ciphertext = cipher.encrypt(nonce, b"plaintext message")
assert cipher.decrypt(nonce, ciphertext) == b"plaintext message"
```

`generate_key` is a class method. On `Aes128Gcm` and `Aes256Gcm` it needs
no argument. On `AesGcm` the size must be given, for example
`AesGcm.generate_key(24)`; a missing or unsupported size raises
`ValueError`.

`encrypt` returns the ciphertext followed by the 16-byte authentication
tag. `decrypt` expects the same layout. The ciphertext is as long as the
plaintext.

## Associated data

Associated data is authenticated but not encrypted. It defaults to empty.
Decryption succeeds only when exactly the same associated data is given:

```python
from gcmcipher.aesgcm import AeadError

header = b"message-id: 42"
ciphertext = cipher.encrypt(nonce, b"body", header)

try:
    cipher.decrypt(nonce, ciphertext, b"message-id: 43")
except AeadError:
    print("rejected: associated data does not match")
```

## Detached tags

If the tag is kept apart from the ciphertext, use the detached methods:

```python
ciphertext, tag = cipher.encrypt_detached(nonce, b"payload", b"header")
plaintext = cipher.decrypt_detached(nonce, ciphertext, tag, b"header")
```

## Errors

`AeadError` is raised when:

- the tag does not verify, because the ciphertext, tag, nonce, key or
  associated data differ from those used to encrypt;
- the tag given to `decrypt_detached` is not 16 bytes, or the input to
  `decrypt` is shorter than 16 bytes;
- the plaintext or the associated data is longer than 2^36 bytes
  (`P_MAX`, `A_MAX`);
- the ciphertext is longer than 2^36 + 16 bytes (`C_MAX`).

The message of `AeadError` says nothing about which of these happened.
The tag comparison runs in constant time.

A nonce whose length differs from the cipher's `nonce_size` raises
`ValueError`.

## Other nonce sizes

```python
from gcmcipher.aesgcm import AesGcm

cipher = AesGcm(AesGcm.generate_key(16), 16)
nonce = cipher.generate_nonce()        # 16 random bytes
ciphertext = cipher.encrypt(nonce, b"data")
```

Stay with the default 12-byte nonce unless a protocol calls for another
length.

## GHASH

`GHash` is the universal hash that GCM uses for authentication. It is
keyed with a 16-byte hash key; any other length raises `ValueError`.

```python
import os
from gcmcipher.ghash import GHash

hash_key = os.urandom(16)
ghash = GHash(hash_key)
ghash.update([bytes(16)])              # whole 16-byte blocks
ghash.update(bytes(32))                # or bytes whose length is a multiple of 16
ghash.update_padded(b"any length")     # last partial block is zero-padded
snapshot = ghash.copy()                # independent copy of the state
digest = ghash.finalize()              # 16 bytes; the state is left as it is
```

`update` raises `ValueError` for a block that is not 16 bytes long or for
data whose length is not a multiple of 16.

## What it does not do

- Everything happens in memory: there is no streaming interface for data
  that arrives in pieces.
- There is no command-line tool and no file format; the caller stores the
  nonce, ciphertext and tag.
- The GHASH multiply is plain Python and is neither fast nor written to
  run in constant time.

## Tests

The `test` extra installs pytest; the tests live in `tests/`.