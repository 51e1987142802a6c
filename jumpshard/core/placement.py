import logging
from collections import Counter
from typing import Iterable

from jumpshard.core.digest import to_bytes
from jumpshard.core.exception import InvalidGrowthError
from jumpshard.core.jump import check_buckets, select_bucket
from jumpshard.core.model.plan import GrowthPlan, KeyMove
from jumpshard.core.router import KeyRouter
from jumpshard.core.types_ import KeyLike


class GrowthPlanner:
    """
    Uses a KeyRouter to provide:
        - per-bucket load for a key sample
        - growth planning (which keys move when buckets are added)

    Only growth is planned. Jump hash has no notion of removing a bucket
    from the middle of the range.
    """

    def __init__(self, router: KeyRouter | None = None) -> None:
        self._router = router if router is not None else KeyRouter()
        self._logger = logging.getLogger("jumpshard.core.placement")

    @property
    def router(self) -> KeyRouter:
        return self._router

    def loads(self, keys: Iterable[KeyLike], buckets: int) -> Counter[int]:
        """
        Return the number of keys routed to each bucket.

        Only buckets that received at least one key appear in the result, so
        memory follows the key sample rather than the bucket count.
        """
        buckets = check_buckets(buckets)
        counts: Counter[int] = Counter()
        for key in keys:
            counts[self._router.bucket_for(key, buckets)] += 1
        return counts

    # ------------------------------------------------------------
    # Growth planning
    # ------------------------------------------------------------

    def plan(self, keys: Iterable[KeyLike], old_buckets: int, new_buckets: int) -> GrowthPlan:
        """
        Compute the keys that change bucket between old_buckets and new_buckets.

        Each key is digested once; both bucket counts are evaluated on the
        same seed.
        """
        check_buckets(old_buckets)
        check_buckets(new_buckets)
        if new_buckets <= old_buckets:
            raise InvalidGrowthError(
                f"growth plan needs new_buckets > old_buckets, got {old_buckets} -> {new_buckets}"
            )

        moves: list[KeyMove] = []
        total = 0
        for key in keys:
            raw = to_bytes(key)
            seed = self._router.seed_for(raw)
            source = select_bucket(seed, old_buckets)
            target = select_bucket(seed, new_buckets)
            total += 1
            if source != target:
                moves.append(KeyMove(raw, source, target))

        plan = GrowthPlan(old_buckets, new_buckets, total, tuple(moves))
        self._logger.info(
            f"Growth {old_buckets} -> {new_buckets}: {plan.moved_keys}/{total} keys move "
            f"({plan.moved_fraction:.4f}, expected {plan.expected_fraction:.4f})"
        )
        return plan
