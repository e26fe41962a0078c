import typing as ty
from typing import Any, Callable, Iterable, List, Optional, Tuple, get_args, get_origin

from typing_inspect import is_literal_type, is_optional_type, is_union_type

from thds.core import log

from .errors import NoGeneratorFoundError
from .generator import ComponentizedGenerator, GenerationStatus, Generator, SimpleGenerationStatus
from .generators import builtin_generators
from .generators.structural import ChoiceGenerator, EnumGenerator, OptionalGenerator, UnionGenerator
from .randomness import RandomSource, SourceOfRandomness
from .type_utils import NoneType, is_assignable, is_enum_type, strip, type_name

logger = log.getLogger(__name__)

Predicate = Callable[[Any], bool]


def _component_types(type_: Any, generator: ComponentizedGenerator) -> Optional[Tuple[Any, ...]]:
    if not isinstance(get_origin(type_), type):
        return None
    args = get_args(type_)
    if len(args) != generator.component_count() or Ellipsis in args:
        return None
    return args


def _non_null(type_: Any) -> Any:
    args = tuple(a for a in get_args(type_) if a is not NoneType)
    return args[0] if len(args) == 1 else ty.Union[args]  # type: ignore[valid-type]


class GeneratorRepository:
    """Maps requested types to generators.

    Registered generators are tried in registration order; the first one claiming a type assignable to
    the requested type wins. Componentized generators get their components resolved from this same
    repository. When nothing registered matches, literals, enums and `None` get a generator built from
    the type itself.

    Unions (including optionals) are the exception: unless a generator claims the union exactly, one is
    assembled arm by arm so that every arm can come up, falling back to the ordinary first-match lookup
    only when some arm has no generator.

    Owns a single source of randomness, used by `generate`. Not safe for concurrent registration and
    lookup.
    """

    def __init__(self, random: Optional[SourceOfRandomness] = None):
        self.random: SourceOfRandomness = random or RandomSource()
        self._entries: List[Tuple[Any, Generator]] = []
        # more specific predicates first, as in a type recursion
        self._structural: List[Tuple[Predicate, Callable[[Any], Generator]]] = [
            (lambda t: t is NoneType, lambda t: ChoiceGenerator(ty.Literal[None])),
            (is_literal_type, ChoiceGenerator),
            (lambda t: is_enum_type(t) and len(t) > 0, EnumGenerator),
        ]

    def add(self, generator: Generator) -> "GeneratorRepository":
        for type_ in generator.types():
            self._entries.append((type_, generator))
        logger.debug(
            "Registered generator",
            generator=generator,
            types=",".join(map(type_name, generator.types())),
        )
        return self

    def register(self, generators: Iterable[Generator]) -> "GeneratorRepository":
        for generator in generators:
            self.add(generator)
        return self

    def is_empty(self) -> bool:
        return not self._entries

    def generator_for(self, type_: Any) -> Generator:
        stripped = strip(type_)
        generator = None
        if is_union_type(stripped):
            generator = self._union_generator_for(stripped)
        if generator is None:
            generator = self._registered_generator_for(stripped)
        if generator is None:
            generator = self._structural_generator_for(stripped)
        if generator is None:
            raise NoGeneratorFoundError(type_)
        return generator

    def generate(self, type_: Any, status: Optional[GenerationStatus] = None) -> Any:
        generator = self.generator_for(type_)
        return generator.generate(self.random, status or SimpleGenerationStatus())

    def _registered_generator_for(self, type_: Any) -> Optional[Generator]:
        for claimed, generator in self._entries:
            if not is_assignable(type_, claimed):
                continue
            if isinstance(generator, ComponentizedGenerator) and not generator.ready():
                component_types = _component_types(type_, generator)
                if component_types is None:
                    continue
                return generator.with_components(*map(self.generator_for, component_types))
            return generator
        return None

    def _structural_generator_for(self, type_: Any) -> Optional[Generator]:
        for predicate, build in self._structural:
            if predicate(type_):
                generator = build(type_)
                logger.debug("Assembled generator", generator=generator)
                return generator
        return None

    def _union_generator_for(self, type_: Any) -> Optional[Generator]:
        """A generator claiming exactly this union, else one assembled arm by arm. When some arm has no
        generator at all, the caller falls back to whichever registered generator covers any one arm."""
        for claimed, generator in self._entries:
            if is_assignable(type_, claimed) and is_assignable(claimed, type_):
                return generator
        try:
            if is_optional_type(type_):
                generator: Generator = OptionalGenerator(type_, self.generator_for(_non_null(type_)))
            else:
                generator = UnionGenerator(type_, [self.generator_for(arg) for arg in get_args(type_)])
        except NoGeneratorFoundError:
            return None
        logger.debug("Assembled generator", generator=generator)
        return generator


def default_repository(random: Optional[SourceOfRandomness] = None) -> GeneratorRepository:
    """A repository holding fresh instances of every built-in generator."""
    return GeneratorRepository(random).register(builtin_generators())
