from dataclasses import dataclass, field
from typing import Any, Mapping

from jumpshard.core.exception import InvalidGrowthError
from jumpshard.core.jump import check_buckets


@dataclass(frozen=True, slots=True)
class KeyMove:
    """A key whose bucket changes when the bucket count grows."""
    key: bytes
    source: int
    target: int

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "source": self.source, "target": self.target}


@dataclass(frozen=True, slots=True)
class GrowthPlan:
    """
    GrowthPlan lists the keys that change bucket when the bucket count grows
    from old_buckets to new_buckets.

    With jump hash every target lies in [old_buckets, new_buckets): keys only
    ever move into the newly added buckets, never between existing ones.
    Keys that stay in place are counted in total_keys but not listed.
    """
    old_buckets: int
    new_buckets: int
    total_keys: int
    moves: tuple[KeyMove, ...] = field(default_factory=tuple)

    @property
    def moved_keys(self) -> int:
        return len(self.moves)

    @property
    def moved_fraction(self) -> float:
        if self.total_keys == 0:
            return 0.0
        return self.moved_keys / self.total_keys

    @property
    def expected_fraction(self) -> float:
        """Fraction of keys a uniform digest is expected to move."""
        return (self.new_buckets - self.old_buckets) / self.new_buckets

    def moves_by_target(self) -> dict[int, list[KeyMove]]:
        grouped: dict[int, list[KeyMove]] = {}
        for move in self.moves:
            grouped.setdefault(move.target, []).append(move)
        return grouped

    def to_dict(self) -> dict[str, Any]:
        return {
            "old_buckets": self.old_buckets,
            "new_buckets": self.new_buckets,
            "total_keys": self.total_keys,
            "moves": [move.to_dict() for move in self.moves],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GrowthPlan":
        """
        Rebuild a plan, rejecting anything a GrowthPlanner could not produce.

        Raises TypeError or ValueError on malformed input.
        """
        old_buckets = check_buckets(_strict_int(data["old_buckets"], "old_buckets"))
        new_buckets = check_buckets(_strict_int(data["new_buckets"], "new_buckets"))
        if new_buckets <= old_buckets:
            raise InvalidGrowthError(
                f"growth plan needs new_buckets > old_buckets, got {old_buckets} -> {new_buckets}"
            )

        total_keys = _strict_int(data["total_keys"], "total_keys")
        raw_moves = data["moves"]
        if not isinstance(raw_moves, list):
            raise TypeError("moves must be a list")
        if not 0 <= len(raw_moves) <= total_keys:
            raise ValueError(f"{len(raw_moves)} moves for {total_keys} keys")

        moves = []
        for m in raw_moves:
            key = m["key"]
            if not isinstance(key, bytes):
                raise TypeError(f"move key must be bytes, got {type(key).__name__}")
            source = _strict_int(m["source"], "source")
            target = _strict_int(m["target"], "target")
            if not 0 <= source < old_buckets:
                raise ValueError(f"move source {source} outside [0, {old_buckets})")
            if not old_buckets <= target < new_buckets:
                raise ValueError(f"move target {target} outside [{old_buckets}, {new_buckets})")
            moves.append(KeyMove(key, source, target))

        return cls(old_buckets, new_buckets, total_keys, tuple(moves))


def _strict_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    return value
