"""Built-in generators.

Importing this package registers every built-in under its name in `GENERATORS`.
"""

import typing as ty

from ..generator import Generator
from .builtin import BooleanGenerator, BytesGenerator, FloatGenerator, IntGenerator, StringGenerator
from .collection import DictGenerator, ListGenerator, SetGenerator
from .registry import GENERATORS, GeneratorFactoryRegistry, register_generator  # noqa: F401
from .structural import ChoiceGenerator, EnumGenerator, OptionalGenerator, UnionGenerator  # noqa: F401
from .time import ClockGenerator, DateGenerator, FixedClock, InstantGenerator  # noqa: F401


def builtin_generators() -> ty.List[Generator]:
    # order matters for lookups by supertype: int before bool, date before datetime
    return [
        IntGenerator(),
        BooleanGenerator(),
        FloatGenerator(),
        StringGenerator(),
        BytesGenerator(),
        DateGenerator(),
        InstantGenerator(),
        ClockGenerator(),
        ListGenerator(),
        SetGenerator(),
        DictGenerator(),
    ]
