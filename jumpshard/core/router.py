from jumpshard.core.digest import XXHash64Digest, to_bytes
from jumpshard.core.jump import check_buckets, select_bucket
from jumpshard.core.types_ import KeyDigest, KeyLike


class KeyRouter:
    """
    KeyRouter binds one KeyDigest to the jump selector.

    - bucket_for() digests a byte/string key, then selects a bucket.
    - bucket_for_seed() selects directly from a caller-supplied 64-bit seed.

    The router holds no state besides its digest, so a single instance can be
    shared freely between threads. Assignments are stable for as long as the
    same digest (and digest seed) is used.
    """

    def __init__(self, digest: KeyDigest | None = None) -> None:
        self._digest = digest if digest is not None else XXHash64Digest()

    @property
    def digest(self) -> KeyDigest:
        return self._digest

    def seed_for(self, key: KeyLike) -> int:
        return self._digest.digest(to_bytes(key))

    def bucket_for(self, key: KeyLike, buckets: int) -> int:
        # fail fast, before digesting
        check_buckets(buckets)
        return select_bucket(self.seed_for(key), buckets)

    def bucket_for_seed(self, seed: int, buckets: int) -> int:
        return select_bucket(seed, buckets)

    def __repr__(self) -> str:
        return f"KeyRouter(digest={self._digest!r})"


_default_router = KeyRouter()


def jump_hash_from_bytes(key: KeyLike, buckets: int, digest: KeyDigest | None = None) -> int:
    """
    Route a byte/string key to a bucket in [0, buckets).

    Uses XXH64 (seed 0) unless another digest is given. Raises
    InvalidBucketCountError when buckets < 1.
    """
    router = _default_router if digest is None else KeyRouter(digest)
    return router.bucket_for(key, buckets)


def jump_hash_from_u64(seed: int, buckets: int) -> int:
    """
    Route a 64-bit seed to a bucket in [0, buckets).

    This entry point does not depend on any digest, so its output is stable
    across processes, versions and languages.
    """
    return select_bucket(seed, buckets)
