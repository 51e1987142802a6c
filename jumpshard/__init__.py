"""
jumpshard: Jump Consistent Hash (Lamping & Veach, 2014).

Maps a key to one of N ordered buckets so that growing N by one moves only
~1/(N+1) of the keys, and only into the new bucket.
"""

from jumpshard.core.digest import (
    Blake2bDigest,
    MD5Digest,
    XXH3Digest,
    XXHash64Digest,
    available_digests,
    get_digest,
)
from jumpshard.core.exception import (
    InvalidBucketCountError,
    InvalidGrowthError,
    InvalidSeedError,
    JumpShardError,
    PlanDecodeError,
    UnknownDigestError,
)
from jumpshard.core.jump import select_bucket
from jumpshard.core.model.plan import GrowthPlan, KeyMove
from jumpshard.core.placement import GrowthPlanner
from jumpshard.core.router import KeyRouter, jump_hash_from_bytes, jump_hash_from_u64
from jumpshard.core.types_ import KeyDigest

__version__ = "0.1.0"

__all__ = (
    "jump_hash_from_bytes",
    "jump_hash_from_u64",
    "select_bucket",
    "KeyRouter",
    "KeyDigest",
    "XXHash64Digest",
    "XXH3Digest",
    "MD5Digest",
    "Blake2bDigest",
    "available_digests",
    "get_digest",
    "GrowthPlanner",
    "GrowthPlan",
    "KeyMove",
    "JumpShardError",
    "InvalidBucketCountError",
    "InvalidSeedError",
    "UnknownDigestError",
    "InvalidGrowthError",
    "PlanDecodeError",
    "__version__",
)
