import operator

from jumpshard.core.exception import InvalidBucketCountError, InvalidSeedError

# Multiplier of the 64-bit linear congruential generator embedded in jump hash
# (L'Ecuyer, "Tables of linear congruential generators of different sizes").
LCG_MULTIPLIER = 2862933555777941757

U64_MASK = (1 << 64) - 1
MAX_BUCKETS = (1 << 32) - 1


def _as_int(value) -> int | None:
    # bool is an int subclass but never a meaningful count or seed
    if isinstance(value, bool):
        return None
    try:
        return operator.index(value)
    except TypeError:
        return None


def check_buckets(buckets: int) -> int:
    """
    Fail fast on a bucket count outside [1, 2^32 - 1].

    A bucket count is a caller contract, not user input: there is no sentinel
    bucket for an empty cluster. Integer-like values (numpy integers, ...)
    are accepted and returned as a plain int.
    """
    value = _as_int(buckets)
    if value is None:
        raise InvalidBucketCountError(
            f"bucket count must be an int, got {type(buckets).__name__}"
        )
    if not 1 <= value <= MAX_BUCKETS:
        raise InvalidBucketCountError(
            f"bucket count must be in [1, {MAX_BUCKETS}], got {value}"
        )
    return value


def check_seed(seed: int) -> int:
    value = _as_int(seed)
    if value is None:
        raise InvalidSeedError(f"seed must be an int, got {type(seed).__name__}")
    if not 0 <= value <= U64_MASK:
        raise InvalidSeedError(f"seed must be a 64-bit unsigned integer, got {value}")
    return value


def select_bucket(seed: int, buckets: int) -> int:
    """
    Map a 64-bit seed to a bucket index in [0, buckets).

    The loop does not scan buckets one by one. Each iteration draws the next
    value of the LCG and computes the next bucket count at which this seed
    would jump; it stops once that jump lands past `buckets`. The LCG sequence
    is the same prefix for every bucket count, which is what makes growing the
    count by one move keys only to the new bucket.

    Numeric contract (bit-exact with the published reference):
        - h is kept modulo 2^64
        - h >> 33 is a logical shift of the 64-bit state
        - (b + 1) * 2^31 and (h >> 33) + 1 are both exact doubles, divided
          once in double precision and truncated toward zero
    """
    buckets = check_buckets(buckets)
    seed = check_seed(seed)

    b, j = -1, 0
    h = seed
    while j < buckets:
        b = j
        h = (h * LCG_MULTIPLIER + 1) & U64_MASK
        j = int(float((b + 1) << 31) / float((h >> 33) + 1))

    return b
