"""Sources of uniformly distributed primitive values.

Generators never touch the `random` module directly; they draw from a `SourceOfRandomness` so that the
entropy source (and its seed) belongs to whoever owns the repository.
"""

import random
import typing as ty

from thds.core import config, log

T = ty.TypeVar("T")

logger = log.getLogger(__name__)


def _parse_seed(value: ty.Any) -> ty.Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return int(value)


SEED = config.item("thds.quickcheck.random.seed", None, parse=_parse_seed)
# unset means a fresh seed per RandomSource; the drawn seed is logged so a run can be replayed.


class SourceOfRandomness(ty.Protocol):
    @property
    def seed(self) -> int:
        ...

    def next_long(self, lo: int, hi: int) -> int:
        ...

    def next_int(self, lo: int, hi: int) -> int:
        ...

    def next_float(self, lo: float, hi: float) -> float:
        ...

    def next_bool(self) -> bool:
        ...

    def choose(self, values: ty.Sequence[T]) -> T:
        ...


def _check_interval(lo, hi) -> None:
    if lo > hi:
        raise ValueError(f"bad range, {lo} > {hi}")


class RandomSource:
    """The stdlib Mersenne Twister, privately owned so that seeding one source never disturbs another."""

    def __init__(self, seed: ty.Optional[int] = None):
        if seed is None:
            seed = SEED()
        if seed is None:
            seed = random.SystemRandom().getrandbits(64)
            logger.debug("Drew fresh seed", seed=seed)
        self._seed = seed
        self._random = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def next_long(self, lo: int, hi: int) -> int:
        """Uniform over [lo, hi], inclusive on both ends."""
        _check_interval(lo, hi)
        return self._random.randint(lo, hi)

    # Python ints are unbounded, so there is nothing to distinguish these two.
    next_int = next_long

    def next_float(self, lo: float, hi: float) -> float:
        _check_interval(lo, hi)
        return self._random.uniform(lo, hi)

    def next_bool(self) -> bool:
        return self._random.random() < 0.5

    def choose(self, values: ty.Sequence[T]) -> T:
        return self._random.choice(values)

    def __repr__(self):
        return f"{type(self).__name__}(seed={self._seed})"
