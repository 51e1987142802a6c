from typing import Iterable, Iterator

from jumpshard.core.jump import U64_MASK


class ParseError(Exception):
    pass


def parse_seed(raw: str) -> int:
    """
    Parse a 64-bit unsigned seed.

    Accepts decimal ("3735928559") and prefixed hexadecimal ("0xdeadbeef"),
    with optional '_' separators as in Python literals.
    """
    text = raw.strip().replace("_", "")
    try:
        if text.lower().startswith("0x"):
            value = int(text[2:], 16)
        else:
            value = int(text, 10)
    except ValueError:
        raise ParseError(f"Invalid seed: {raw!r}") from None

    if not 0 <= value <= U64_MASK:
        raise ParseError(f"Seed out of 64-bit unsigned range: {raw!r}")

    return value


def iter_keys(lines: Iterable[bytes]) -> Iterator[bytes]:
    """
    Yield one raw key per line, without the line terminator.

    Lines are read as bytes and never decoded: any byte sequence is a key.
    Blank lines are skipped.
    """
    for line in lines:
        key = line.rstrip(b"\r\n")
        if key:
            yield key
