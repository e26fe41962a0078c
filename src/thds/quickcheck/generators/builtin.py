import math
import string
import typing as ty

from thds.core import config, log

from ..errors import ConfigurationError
from ..generator import GenerationStatus, Generator
from ..metadata import InRange
from ..randomness import SourceOfRandomness
from .registry import register_generator

N = ty.TypeVar("N", int, float)

logger = log.getLogger(__name__)

MIN_INT = -(2**63)
MAX_INT = 2**63 - 1
MIN_FLOAT = -float(2**32)
MAX_FLOAT = float(2**32)

MAX_SIZE = config.item("thds.quickcheck.max_collection_size", 32, parse=int)
# caps the length of strings, bytes and collections, whatever size the generation status asks for


def bounded_size(random: SourceOfRandomness, status: GenerationStatus) -> int:
    return random.next_int(0, max(0, min(status.size(), MAX_SIZE())))


def parse_interval(
    range: InRange, parse: ty.Callable[[ty.Any], N], default_min: N, default_max: N
) -> ty.Tuple[N, N]:
    try:
        lo = default_min if range.min is None else parse(range.min)
        hi = default_max if range.max is None else parse(range.max)
    except (TypeError, ValueError, OverflowError) as err:
        raise ConfigurationError(f"cannot parse range endpoint: {err}", range.min, range.max) from err
    if lo > hi:
        raise ConfigurationError(f"bad range, {range.min} > {range.max}", range.min, range.max)
    return lo, hi


def parse_int(raw: ty.Any) -> int:
    """Text goes through `int()`; typed endpoints must already be integral."""
    if isinstance(raw, bool):
        raise TypeError(f"{raw!r} is a bool, not an int")
    if isinstance(raw, str):
        return int(raw)
    value = int(raw)
    if value != raw:
        raise ValueError(f"{raw!r} is not integral")
    return value


def parse_finite_float(raw: ty.Any) -> float:
    if isinstance(raw, bool):
        raise TypeError(f"{raw!r} is a bool, not a float")
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"{raw!r} is not a finite float")
    return value


@register_generator("int")
class IntGenerator(Generator[int]):
    def __init__(self):
        super().__init__(int)
        self.min = MIN_INT
        self.max = MAX_INT

    def _configure(self, range: InRange) -> None:
        self.min, self.max = parse_interval(range, parse_int, MIN_INT, MAX_INT)
        logger.debug("Configured int range", min=self.min, max=self.max)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> int:
        return random.next_long(self.min, self.max)


@register_generator("bool")
class BooleanGenerator(Generator[bool]):
    def __init__(self):
        super().__init__(bool)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> bool:
        return random.next_bool()


@register_generator("float")
class FloatGenerator(Generator[float]):
    def __init__(self):
        super().__init__(float)
        self.min = MIN_FLOAT
        self.max = MAX_FLOAT

    def _configure(self, range: InRange) -> None:
        self.min, self.max = parse_interval(range, parse_finite_float, MIN_FLOAT, MAX_FLOAT)
        logger.debug("Configured float range", min=self.min, max=self.max)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> float:
        return random.next_float(self.min, self.max)


@register_generator("str")
class StringGenerator(Generator[str]):
    def __init__(self, chars: str = string.printable):
        super().__init__(str)
        self.chars = chars

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> str:
        return "".join(random.choose(self.chars) for _ in range(bounded_size(random, status)))


@register_generator("bytes")
class BytesGenerator(Generator[bytes]):
    def __init__(self):
        super().__init__(bytes)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> bytes:
        return bytes(random.next_int(0, 255) for _ in range(bounded_size(random, status)))
