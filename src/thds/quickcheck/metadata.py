"""Per-parameter declarations handed over by whatever discovers test parameters.

These are plain frozen records; none of them does anything on its own. A `ParameterContext` consumes
them in a fixed order: `ForAll`, then `From` (optionally with an `InRange`), then `SuchThat`.
"""

import typing as ty

import attrs

from thds.core import config

SAMPLE_SIZE = config.item("thds.quickcheck.sample_size", 100, parse=int)

GeneratorRef = ty.Union[str, ty.Callable[[], ty.Any]]
# a registered name, a Generator subclass, or any zero-argument factory returning a Generator


def _positive(instance, attribute: attrs.Attribute, value: int) -> None:
    if value < 1:
        raise ValueError(f"{attribute.name} must be a positive integer; got {value}")


@attrs.frozen
class ForAll:
    """How many values to generate for a parameter. Exhaustively enumerable types (bools, enums,
    literals) ignore this."""

    sample_size: int = attrs.field(
        factory=lambda: SAMPLE_SIZE(), converter=int, validator=_positive
    )


@attrs.frozen(init=False)
class From:
    """Generators to use for a parameter instead of the default repository."""

    generators: ty.Tuple[GeneratorRef, ...]

    def __init__(self, *generators: GeneratorRef):
        self.__attrs_init__(tuple(generators))


@attrs.frozen
class SuchThat:
    """A boolean expression that generated values must satisfy. It is opaque here; evaluating it is
    up to the test harness."""

    expression: str


@attrs.frozen
class InRange:
    """A closed interval to configure a generator with.

    `None` means the endpoint was not given and the generator's own default applies. Endpoints are
    usually strings, but generators may also accept values of their native type. `format` is a hint
    which generators with a single canonical textual format are free to ignore.
    """

    min: ty.Any = None
    max: ty.Any = None
    format: ty.Optional[str] = None
