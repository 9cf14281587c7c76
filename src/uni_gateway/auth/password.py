"""bcrypt password hashing, cost factor 10.

bcrypt only reads the first 72 bytes of a secret. Older hashes were produced
by implementations that truncated silently, while bcrypt>=5 raises on longer
input, so the secret is cut to 72 UTF-8 bytes explicitly before hashing and
checking. Registration allows up to 128 characters.
"""

import bcrypt

_ROUNDS = 10
_BCRYPT_MAX_BYTES = 72


def _secret(plain: str) -> bytes:
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(_secret(plain), bcrypt.gensalt(rounds=_ROUNDS)).decode("ascii")


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(_secret(plain), hashed.encode("ascii"))
