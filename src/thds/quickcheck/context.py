import enum
import typing as ty

from typing_inspect import is_literal_type

from thds.core import log

from .errors import IncompatibleGeneratorError, PhaseOrderError, UnknownGeneratorError
from .generator import Generator
from .generators import GENERATORS
from .metadata import ForAll, From, GeneratorRef, InRange, SuchThat
from .randomness import SourceOfRandomness
from .repository import GeneratorRepository
from .type_utils import is_assignable, is_enum_type, literal_values, raw_type, strip, type_name

logger = log.getLogger(__name__)

BOOLEAN_SAMPLE_SIZE = 2


class _Phase(enum.IntEnum):
    NEW = 0
    QUANTIFIER = 1
    GENERATORS = 2
    CONSTRAINT = 3


def _instantiate(ref: GeneratorRef) -> Generator:
    if isinstance(ref, str):
        try:
            factory = GENERATORS[ref]
        except KeyError:
            raise UnknownGeneratorError(ref) from None
    else:
        factory = ref
    generator = factory()
    if not isinstance(generator, Generator):
        raise TypeError(f"{ref!r} did not produce a Generator; got {generator!r}")
    return generator


class ParameterContext:
    """Everything known about how to generate values for one test parameter.

    Built in three phases which must come in this order, each at most once (any may be skipped):

    1. `add_quantifier` decides the sample size from the parameter's type.
    2. `add_generators` binds explicitly requested generators, checking each against the parameter's
       type as soon as it is instantiated.
    3. `add_constraint` attaches the expression that generated values must satisfy.

    The harness then reads `sample_size`, `expression` and `explicit_generator()`. When there is no
    explicit generator it is up to the harness to resolve one from its shared repository.
    """

    def __init__(self, parameter_type: ty.Any, random: ty.Optional[SourceOfRandomness] = None):
        self._parameter_type = parameter_type
        self._repo = GeneratorRepository(random)
        self._sample_size = self._decide_sample_size(ForAll())
        self._expression: ty.Optional[str] = None
        self._phase = _Phase.NEW

    def _enter(self, phase: _Phase) -> None:
        if phase <= self._phase:
            raise PhaseOrderError(phase.name.lower(), self._phase.name.lower())
        self._phase = phase

    def add_quantifier(self, quantifier: ForAll) -> "ParameterContext":
        self._enter(_Phase.QUANTIFIER)
        self._sample_size = self._decide_sample_size(quantifier)
        return self

    def _decide_sample_size(self, quantifier: ForAll) -> int:
        type_ = strip(self._parameter_type)
        if is_literal_type(type_):
            return len(literal_values(type_))
        raw = raw_type(type_)
        if raw is bool:
            return BOOLEAN_SAMPLE_SIZE
        if is_enum_type(raw):
            return len(raw)
        return quantifier.sample_size

    def add_generators(
        self, generators: From, in_range: ty.Optional[InRange] = None
    ) -> "ParameterContext":
        """Registration is not transactional: if the third generator is incompatible, the first two
        stay registered."""
        self._enter(_Phase.GENERATORS)
        for ref in generators.generators:
            generator = _instantiate(ref)
            self._ensure_correct_type(generator)
            if in_range is not None:
                generator.configure(in_range)
            self._repo.add(generator)
            logger.debug(
                "Bound explicit generator",
                parameter_type=type_name(self._parameter_type),
                generator=generator,
            )
        return self

    def _ensure_correct_type(self, generator: Generator) -> None:
        for claimed in generator.types():
            if not is_assignable(self._parameter_type, claimed):
                raise IncompatibleGeneratorError(
                    generator, From.__name__, type_name(self._parameter_type), type_name(claimed)
                )

    def add_constraint(self, constraint: ty.Optional[SuchThat]) -> "ParameterContext":
        self._enter(_Phase.CONSTRAINT)
        if constraint is not None:
            self._expression = constraint.expression
        return self

    @property
    def parameter_type(self) -> ty.Any:
        return self._parameter_type

    @property
    def sample_size(self) -> int:
        return self._sample_size

    @property
    def expression(self) -> ty.Optional[str]:
        return self._expression

    def explicit_generator(self) -> ty.Optional[Generator]:
        return None if self._repo.is_empty() else self._repo.generator_for(self._parameter_type)

    def __repr__(self):
        return (
            f"{type(self).__name__}({type_name(self._parameter_type)}, sample_size={self._sample_size},"
            f" expression={self._expression!r})"
        )
