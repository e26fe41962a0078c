"""Type-directed generation of random values for property-based tests."""

from .context import ParameterContext  # noqa: F401
from .errors import (  # noqa: F401
    ConfigurationError,
    IncompatibleGeneratorError,
    NoGeneratorFoundError,
    PhaseOrderError,
    QuickcheckError,
    UnknownGeneratorError,
)
from .generator import (  # noqa: F401
    ComponentizedGenerator,
    GenerationStatus,
    Generator,
    SimpleGenerationStatus,
)
from .generators import GENERATORS, builtin_generators, register_generator  # noqa: F401
from .metadata import ForAll, From, InRange, SuchThat  # noqa: F401
from .randomness import RandomSource, SourceOfRandomness  # noqa: F401
from .repository import GeneratorRepository, default_repository  # noqa: F401
from .type_utils import is_assignable  # noqa: F401
