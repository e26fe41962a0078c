import typing as ty

from ..generator import ComponentizedGenerator, GenerationStatus
from ..randomness import SourceOfRandomness
from .builtin import bounded_size
from .registry import register_generator

T = ty.TypeVar("T")
K = ty.TypeVar("K")
V = ty.TypeVar("V")


@register_generator("list")
class ListGenerator(ComponentizedGenerator[ty.List[T]]):
    def __init__(self, components=()):
        super().__init__(list, components=components)

    def component_count(self) -> int:
        return 1

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> ty.List[T]:
        (element,) = self.components
        return [element.generate(random, status) for _ in range(bounded_size(random, status))]


@register_generator("set")
class SetGenerator(ComponentizedGenerator[ty.Set[T]]):
    """Sets may come out smaller than the drawn size when the element generator repeats itself."""

    def __init__(self, components=()):
        super().__init__(set, components=components)

    def component_count(self) -> int:
        return 1

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> ty.Set[T]:
        (element,) = self.components
        return {element.generate(random, status) for _ in range(bounded_size(random, status))}


@register_generator("dict")
class DictGenerator(ComponentizedGenerator[ty.Dict[K, V]]):
    def __init__(self, components=()):
        super().__init__(dict, components=components)

    def component_count(self) -> int:
        return 2

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> ty.Dict[K, V]:
        key, value = self.components
        return {
            key.generate(random, status): value.generate(random, status)
            for _ in range(bounded_size(random, status))
        }
