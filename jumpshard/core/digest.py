import hashlib
from typing import Callable

import xxhash

from jumpshard.core.exception import UnknownDigestError
from jumpshard.core.jump import check_seed
from jumpshard.core.types_ import KeyDigest, KeyLike


def to_bytes(key: KeyLike) -> bytes:
    """Normalize a key to bytes. Strings are encoded as UTF-8."""
    if isinstance(key, bytes):
        return key
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytearray, memoryview)):
        return bytes(key)
    raise TypeError(f"key must be bytes or str, got {type(key).__name__}")


class XXHash64Digest:
    """
    XXH64 of the key, as an unsigned 64-bit integer.

    This is the default digest: fast, well distributed, and a common pairing
    with jump hash in sharded stores.
    """

    name = "xxh64"

    def __init__(self, seed: int = 0) -> None:
        self._seed = check_seed(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def digest(self, key: bytes) -> int:
        return xxhash.xxh64_intdigest(key, seed=self._seed)

    def __repr__(self) -> str:
        return f"XXHash64Digest(seed={self._seed})"


class XXH3Digest:
    name = "xxh3"

    def __init__(self, seed: int = 0) -> None:
        self._seed = check_seed(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def digest(self, key: bytes) -> int:
        return xxhash.xxh3_64_intdigest(key, seed=self._seed)

    def __repr__(self) -> str:
        return f"XXH3Digest(seed={self._seed})"


class MD5Digest:
    """
    First 8 bytes (big-endian) of the MD5 of the key.

    MD5 is used purely as a deterministic mapping function, no cryptographic
    guarantee is assumed. A non-zero seed is prepended to the key as 8
    big-endian bytes.
    """

    name = "md5"

    def __init__(self, seed: int = 0) -> None:
        self._seed = check_seed(seed)
        self._prefix = self._seed.to_bytes(8, "big") if self._seed else b""

    @property
    def seed(self) -> int:
        return self._seed

    def digest(self, key: bytes) -> int:
        h = hashlib.md5(self._prefix + key).digest()
        return int.from_bytes(h[:8], "big")

    def __repr__(self) -> str:
        return f"MD5Digest(seed={self._seed})"


class Blake2bDigest:
    """BLAKE2b with an 8-byte output; the seed is used as the BLAKE2 salt."""

    name = "blake2b"

    def __init__(self, seed: int = 0) -> None:
        self._seed = check_seed(seed)
        self._salt = self._seed.to_bytes(16, "little")

    @property
    def seed(self) -> int:
        return self._seed

    def digest(self, key: bytes) -> int:
        h = hashlib.blake2b(key, digest_size=8, salt=self._salt).digest()
        return int.from_bytes(h, "big")

    def __repr__(self) -> str:
        return f"Blake2bDigest(seed={self._seed})"


_REGISTRY: dict[str, Callable[[int], KeyDigest]] = {
    XXHash64Digest.name: XXHash64Digest,
    XXH3Digest.name: XXH3Digest,
    MD5Digest.name: MD5Digest,
    Blake2bDigest.name: Blake2bDigest,
}

DEFAULT_DIGEST = XXHash64Digest.name


def available_digests() -> list[str]:
    return sorted(_REGISTRY)


def get_digest(name: str = DEFAULT_DIGEST, seed: int = 0) -> KeyDigest:
    try:
        factory = _REGISTRY[name]
    except KeyError:
        raise UnknownDigestError(
            f"Unknown digest '{name}', expected one of: {', '.join(available_digests())}"
        ) from None
    return factory(seed)
