"""Generators the repository assembles on demand from the shape of the requested type, rather than
looking up by registration."""

import enum
import typing as ty

from ..generator import GenerationStatus, Generator
from ..randomness import SourceOfRandomness
from ..type_utils import literal_values

T = ty.TypeVar("T")
E = ty.TypeVar("E", bound=enum.Enum)


class EnumGenerator(Generator[E]):
    def __init__(self, enum_type: ty.Type[E]):
        super().__init__(enum_type)
        self.members: ty.List[E] = list(enum_type)
        if not self.members:
            raise TypeError(f"{enum_type} has no members to generate")

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> E:
        return random.choose(self.members)


class ChoiceGenerator(Generator[T]):
    """Picks uniformly among the values of a `Literal[...]` type."""

    def __init__(self, literal_type: ty.Any):
        super().__init__(literal_type)
        self.values: ty.Tuple[T, ...] = literal_values(literal_type)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> T:
        return random.choose(self.values)


class OptionalGenerator(Generator[ty.Optional[T]]):
    def __init__(self, optional_type: ty.Any, inner: Generator[T], null_rate: float = 0.5):
        super().__init__(optional_type)
        self.inner = inner
        self.null_rate = null_rate

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> ty.Optional[T]:
        if random.next_float(0.0, 1.0) < self.null_rate:
            return None
        return self.inner.generate(random, status)


class UnionGenerator(Generator[T]):
    """Picks one of the union's arms uniformly, then generates from it."""

    def __init__(self, union_type: ty.Any, arms: ty.Sequence[Generator]):
        super().__init__(union_type)
        self.arms = tuple(arms)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> T:
        return random.choose(self.arms).generate(random, status)
