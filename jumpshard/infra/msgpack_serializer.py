import struct
from typing import Protocol

import msgpack

from jumpshard.core.exception import PlanDecodeError
from jumpshard.core.model.plan import GrowthPlan

HEADER = struct.Struct("!I")


class Serializable(Protocol):
    def to_dict(self) -> dict:
        ...


class Serializer:
    """Length-prefixed msgpack frames: a 4-byte big-endian size, then the payload."""

    @staticmethod
    def serialize(s: Serializable) -> bytes:
        payload = msgpack.packb(s.to_dict(), use_bin_type=True)
        frame = HEADER.pack(len(payload)) + payload
        return frame

    @staticmethod
    def deserialize(frame: bytes) -> dict:
        if len(frame) < HEADER.size:
            raise PlanDecodeError("Frame too short for length header")

        (length,) = HEADER.unpack_from(frame)
        payload = frame[HEADER.size:]
        if len(payload) != length:
            raise PlanDecodeError(
                f"Frame length mismatch: header says {length}, got {len(payload)} bytes"
            )

        try:
            data = msgpack.unpackb(payload, raw=False)
        except (msgpack.exceptions.UnpackException, ValueError) as exc:
            raise PlanDecodeError(f"Invalid msgpack payload: {exc}") from exc

        if not isinstance(data, dict):
            raise PlanDecodeError("Frame payload is not a map")
        return data

    @classmethod
    def load_plan(cls, frame: bytes) -> GrowthPlan:
        data = cls.deserialize(frame)
        try:
            return GrowthPlan.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise PlanDecodeError(f"Invalid growth plan: {exc}") from exc
