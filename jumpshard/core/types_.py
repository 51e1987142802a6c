from typing import Protocol

KeyLike = bytes | bytearray | memoryview | str


class KeyDigest(Protocol):
    name: str

    def digest(self, key: bytes) -> int:
        ...
