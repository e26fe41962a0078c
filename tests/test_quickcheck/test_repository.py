import typing as ty
from datetime import date, datetime

import pytest

from thds.quickcheck.errors import NoGeneratorFoundError
from thds.quickcheck.generator import GenerationStatus, Generator, SimpleGenerationStatus
from thds.quickcheck.generators import (
    BooleanGenerator,
    ChoiceGenerator,
    EnumGenerator,
    FixedClock,
    IntGenerator,
    ListGenerator,
    OptionalGenerator,
    StringGenerator,
    UnionGenerator,
)
from thds.quickcheck.randomness import RandomSource, SourceOfRandomness
from thds.quickcheck.repository import GeneratorRepository, default_repository

from . import conftest as types

STATUS = SimpleGenerationStatus()


class DogGenerator(Generator[types.Dog]):
    def __init__(self):
        super().__init__(types.Dog)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> types.Dog:
        return types.Dog()


class AnimalGenerator(Generator[types.Animal]):
    def __init__(self):
        super().__init__(types.Animal)

    def generate(self, random: SourceOfRandomness, status: GenerationStatus) -> types.Animal:
        return types.Animal()


def test_empty_until_something_is_added():
    repo = GeneratorRepository(RandomSource(1))
    assert repo.is_empty()
    repo.add(IntGenerator())
    assert not repo.is_empty()


def test_first_registered_match_wins():
    first, second = IntGenerator(), IntGenerator()
    repo = GeneratorRepository(RandomSource(1)).register([first, second])
    assert all(repo.generator_for(int) is first for _ in range(10))


def test_registration_order_beats_specificity():
    animal, dog = AnimalGenerator(), DogGenerator()
    repo = GeneratorRepository(RandomSource(1)).register([dog, animal])
    # a Dog may stand in for an Animal, and the dog generator came first
    assert repo.generator_for(types.Animal) is dog
    assert repo.generator_for(types.Dog) is dog

    repo = GeneratorRepository(RandomSource(1)).register([animal, dog])
    assert repo.generator_for(types.Animal) is animal
    # an Animal may not stand in for a Dog
    assert repo.generator_for(types.Dog) is dog


def test_no_generator_found_names_the_type():
    repo = GeneratorRepository(RandomSource(1)).add(IntGenerator())
    with pytest.raises(NoGeneratorFoundError, match="FixedClock") as exc_info:
        repo.generator_for(FixedClock)
    assert exc_info.value.requested_type is FixedClock


def test_supertypes_resolve_to_the_builtin_for_that_type():
    repo = default_repository(RandomSource(1))
    assert type(repo.generator_for(bool)) is BooleanGenerator
    assert type(repo.generator_for(int)) is IntGenerator
    assert isinstance(repo.generate(date), date)
    assert isinstance(repo.generate(datetime), datetime)


def test_components_are_resolved_from_the_same_repository(random: RandomSource):
    repo = GeneratorRepository(random).register([ListGenerator(), StringGenerator()])
    gen = repo.generator_for(ty.Sequence[str])
    assert isinstance(gen, ListGenerator)
    assert isinstance(gen.components[0], StringGenerator)
    value = gen.generate(random, STATUS)
    assert isinstance(value, list) and all(isinstance(v, str) for v in value)


def test_componentized_generators_need_type_arguments():
    repo = GeneratorRepository(RandomSource(1)).register([ListGenerator(), IntGenerator()])
    with pytest.raises(NoGeneratorFoundError):
        repo.generator_for(list)


def test_missing_component_is_reported():
    repo = GeneratorRepository(RandomSource(1)).add(ListGenerator())
    with pytest.raises(NoGeneratorFoundError, match="int"):
        repo.generator_for(ty.List[int])


def test_enum_without_members_has_no_generator():
    repo = GeneratorRepository(RandomSource(1))
    with pytest.raises(NoGeneratorFoundError, match="Empty"):
        repo.generator_for(types.Empty)
    with pytest.raises(NoGeneratorFoundError):
        repo.generator_for(ty.Optional[types.Empty])


@pytest.mark.parametrize(
    "type_, expected_generator",
    [
        pytest.param(types.Color, EnumGenerator, id="enum"),
        pytest.param(types.LiteralMixed, ChoiceGenerator, id="literal"),
        pytest.param(type(None), ChoiceGenerator, id="None"),
        pytest.param(ty.Optional[int], OptionalGenerator, id="optional"),
        pytest.param(ty.Union[int, str], UnionGenerator, id="union"),
    ],
)
def test_assembled_from_the_type(type_, expected_generator):
    repo = default_repository(RandomSource(1))
    assert isinstance(repo.generator_for(type_), expected_generator)


def test_union_falls_back_to_a_registered_arm():
    ints = IntGenerator()
    repo = GeneratorRepository(RandomSource(1)).add(ints)
    # no generator for FixedClock, so the union can't be assembled
    assert repo.generator_for(ty.Union[int, FixedClock]) is ints


def test_optional_produces_both(random: RandomSource):
    repo = GeneratorRepository(random).add(IntGenerator())
    values = [repo.generate(ty.Optional[int]) for _ in range(200)]
    assert None in values
    assert any(isinstance(v, int) for v in values)


def test_enum_produces_every_member(random: RandomSource):
    repo = GeneratorRepository(random)
    assert {repo.generate(types.Color) for _ in range(200)} == set(types.Color)


@pytest.mark.parametrize(
    "type_, check",
    [
        pytest.param(int, lambda v: type(v) is int, id="int"),
        pytest.param(types.UserId, lambda v: type(v) is int, id="newtype"),
        pytest.param(str, lambda v: isinstance(v, str), id="str"),
        pytest.param(bytes, lambda v: isinstance(v, bytes), id="bytes"),
        pytest.param(FixedClock, lambda v: isinstance(v, FixedClock), id="clock"),
        pytest.param(
            ty.Dict[str, ty.List[int]],
            lambda v: all(isinstance(k, str) and isinstance(x, list) for k, x in v.items()),
            id="nested collections",
        ),
        pytest.param(ty.FrozenSet[int], None, id="no frozenset generator"),
        pytest.param(ty.AbstractSet[bool], lambda v: isinstance(v, set), id="abstract set"),
        pytest.param(types.LiteralStr, lambda v: v in ("one", "two", "three"), id="literal"),
        pytest.param(
            ty.Optional[types.Color], lambda v: v is None or v in types.Color, id="optional enum"
        ),
    ],
)
def test_default_repository_generates(random: RandomSource, type_, check):
    repo = default_repository(random)
    if check is None:
        with pytest.raises(NoGeneratorFoundError):
            repo.generator_for(type_)
        return
    for _ in range(20):
        value = repo.generate(type_)
        assert check(value), (type_, value)
