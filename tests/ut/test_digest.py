import hashlib

import pytest

from jumpshard.core.digest import (
    Blake2bDigest,
    MD5Digest,
    XXH3Digest,
    XXHash64Digest,
    available_digests,
    get_digest,
    to_bytes,
)
from jumpshard.core.exception import InvalidSeedError, UnknownDigestError
from jumpshard.core.jump import U64_MASK

ALL_DIGESTS = [XXHash64Digest, XXH3Digest, MD5Digest, Blake2bDigest]


@pytest.mark.ut
def test_xxh64_known_value_for_empty_key():
    assert XXHash64Digest().digest(b"") == 0xEF46DB3751D8E999


@pytest.mark.ut
def test_md5_uses_first_eight_bytes_big_endian():
    assert MD5Digest().digest(b"") == 0xD41D8CD98F00B204
    expected = int.from_bytes(hashlib.md5(b"hello").digest()[:8], "big")
    assert MD5Digest().digest(b"hello") == expected


@pytest.mark.ut
@pytest.mark.parametrize("cls", ALL_DIGESTS)
def test_digest_is_64bit_and_deterministic(cls):
    digest = cls()
    for key in (b"", b"a", b"key", b"\x00" * 64, "clé".encode()):
        h = digest.digest(key)
        assert 0 <= h <= U64_MASK
        assert h == digest.digest(key)


@pytest.mark.ut
@pytest.mark.parametrize("cls", ALL_DIGESTS)
def test_seed_changes_digest(cls):
    assert cls(seed=0).digest(b"user:42") != cls(seed=7).digest(b"user:42")


@pytest.mark.ut
@pytest.mark.parametrize("cls", ALL_DIGESTS)
def test_distinct_keys_rarely_collide(cls):
    digest = cls()
    values = {digest.digest(str(i).encode()) for i in range(5000)}
    assert len(values) == 5000


@pytest.mark.ut
@pytest.mark.parametrize("seed", [-1, U64_MASK + 1])
def test_digest_seed_must_be_u64(seed):
    with pytest.raises(InvalidSeedError):
        XXHash64Digest(seed=seed)


@pytest.mark.ut
def test_to_bytes_accepts_text_and_buffers():
    assert to_bytes("clé") == "clé".encode("utf-8")
    assert to_bytes(b"abc") == b"abc"
    assert to_bytes(bytearray(b"abc")) == b"abc"
    assert to_bytes(memoryview(b"abc")) == b"abc"


@pytest.mark.ut
@pytest.mark.parametrize("key", [42, None, 1.5, ["a"]])
def test_to_bytes_rejects_other_types(key):
    with pytest.raises(TypeError):
        to_bytes(key)


@pytest.mark.ut
def test_available_digests():
    assert available_digests() == ["blake2b", "md5", "xxh3", "xxh64"]


@pytest.mark.ut
@pytest.mark.parametrize("name,cls", [
    ("xxh64", XXHash64Digest),
    ("xxh3", XXH3Digest),
    ("md5", MD5Digest),
    ("blake2b", Blake2bDigest),
])
def test_get_digest_by_name(name, cls):
    digest = get_digest(name, seed=3)
    assert isinstance(digest, cls)
    assert digest.name == name
    assert digest.seed == 3


@pytest.mark.ut
def test_get_digest_default_is_xxh64():
    assert isinstance(get_digest(), XXHash64Digest)


@pytest.mark.ut
def test_get_unknown_digest():
    with pytest.raises(UnknownDigestError):
        get_digest("crc32")
    with pytest.raises(LookupError):
        get_digest("sha1")
