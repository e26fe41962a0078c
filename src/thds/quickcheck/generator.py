import abc
import typing as ty

import attrs

from .errors import ConfigurationError
from .metadata import InRange
from .randomness import SourceOfRandomness
from .type_utils import is_assignable, type_name

T = ty.TypeVar("T")


class GenerationStatus(ty.Protocol):
    """Per-iteration hints a generator may use to scale what it produces."""

    def size(self) -> int:
        ...


@attrs.frozen
class SimpleGenerationStatus:
    size_: int = attrs.field(default=10, alias="size")

    def size(self) -> int:
        return self.size_


class Generator(abc.ABC, ty.Generic[T]):
    """Produces values of the types it claims.

    A generator is configured at most once, before its first value is produced, and is otherwise
    stateless: `generate` may be called any number of times in sequence.
    """

    def __init__(self, *types: ty.Any):
        if not types:
            raise TypeError(f"{type(self).__name__} must claim at least one type")
        self._types = tuple(types)
        self._configured = False

    def types(self) -> ty.Tuple[ty.Any, ...]:
        return self._types

    def can_register_as(self, type_: ty.Any) -> bool:
        return any(is_assignable(type_, claimed) for claimed in self._types)

    def configure(self, range: InRange) -> None:
        if self._configured:
            raise ConfigurationError(f"{self} has already been configured", range.min, range.max)
        self._configure(range)
        self._configured = True

    def _configure(self, range: InRange) -> None:
        """Override to accept range configuration."""
        raise ConfigurationError(f"{self} does not accept range configuration", range.min, range.max)

    @abc.abstractmethod
    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> T:
        ...

    def __repr__(self):
        return f"{type(self).__name__}({', '.join(map(type_name, self._types))})"


class ComponentizedGenerator(Generator[T]):
    """A generator for a parameterized container, which needs one generator per type argument
    (e.g. one for `List[int]`, two for `Dict[str, float]`).

    The instance registered in a repository has no components; `with_components` returns a fresh
    instance that does, carrying over any range configuration.
    """

    def __init__(self, *types: ty.Any, components: ty.Sequence[Generator] = ()):
        super().__init__(*types)
        self.components: ty.Tuple[Generator, ...] = tuple(components)

    @abc.abstractmethod
    def component_count(self) -> int:
        ...

    def with_components(self, *components: Generator) -> "ComponentizedGenerator[T]":
        if len(components) != self.component_count():
            raise TypeError(
                f"{type(self).__name__} needs {self.component_count()} component generators;"
                f" got {len(components)}"
            )
        new = type(self)(components=components)
        new.__dict__.update(
            {k: v for k, v in self.__dict__.items() if k not in ("components", "_types")}
        )
        return new

    def ready(self) -> bool:
        return len(self.components) == self.component_count()
