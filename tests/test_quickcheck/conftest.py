import enum
import typing as ty
from typing import Literal, NewType, TypeVar

import pytest

from thds.quickcheck.randomness import RandomSource


class Color(enum.Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


class Priority(enum.IntEnum):
    LOW = 1
    HIGH = 2


class Empty(enum.Enum):
    pass


UserId = NewType("UserId", int)
NestedUserId = NewType("NestedUserId", UserId)

LiteralStr = Literal["one", "two", "three"]
LiteralMixed = Literal[1, "two", 3, "four"]

TVInt = TypeVar("TVInt", bound=int)
TVAny = TypeVar("TVAny")
TVConstrained = TypeVar("TVConstrained", int, str)


class Animal:
    pass


class Dog(Animal):
    pass


OptionalDog = ty.Optional[Dog]


@pytest.fixture
def random() -> RandomSource:
    return RandomSource(1729)
