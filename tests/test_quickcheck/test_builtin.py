import pytest

from thds.attrs_utils.registry import Registry
from thds.quickcheck.errors import ConfigurationError
from thds.quickcheck.generator import Generator, SimpleGenerationStatus
from thds.quickcheck.generators import GENERATORS, builtin_generators
from thds.quickcheck.generators.builtin import (
    MAX_SIZE,
    BooleanGenerator,
    BytesGenerator,
    FloatGenerator,
    IntGenerator,
    StringGenerator,
)
from thds.quickcheck.metadata import InRange
from thds.quickcheck.randomness import RandomSource

STATUS = SimpleGenerationStatus()


def test_int_range(random: RandomSource):
    gen = IntGenerator()
    gen.configure(InRange(min="-3", max=3))
    values = {gen.generate(random, STATUS) for _ in range(500)}
    assert values == set(range(-3, 4))


def test_float_range(random: RandomSource):
    gen = FloatGenerator()
    gen.configure(InRange(min="0.5", max="0.75"))
    assert all(0.5 <= gen.generate(random, STATUS) <= 0.75 for _ in range(500))


@pytest.mark.parametrize(
    "range_",
    [
        pytest.param(InRange(min="ten"), id="unparseable min"),
        pytest.param(InRange(max="1e3"), id="not an int"),
        pytest.param(InRange(min="5", max="4"), id="inverted"),
        pytest.param(InRange(min=1.7), id="fractional typed endpoint"),
        pytest.param(InRange(max=True), id="bool endpoint"),
        pytest.param(InRange(min=float("-inf")), id="infinite typed endpoint"),
    ],
)
def test_int_bad_range(range_: InRange):
    with pytest.raises(ConfigurationError):
        IntGenerator().configure(range_)


def test_int_integral_typed_endpoints(random: RandomSource):
    gen = IntGenerator()
    gen.configure(InRange(min=2.0, max=2))
    assert gen.generate(random, STATUS) == 2


@pytest.mark.parametrize(
    "lo, hi",
    [
        pytest.param("nan", "1.0", id="nan min"),
        pytest.param("0.0", float("nan"), id="typed nan max"),
        pytest.param("-inf", "inf", id="infinite"),
        pytest.param("0.0", "1e400", id="overflows to inf"),
    ],
)
def test_float_rejects_non_finite_endpoints(lo, hi):
    with pytest.raises(ConfigurationError) as exc_info:
        FloatGenerator().configure(InRange(min=lo, max=hi))
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_generators_without_range_support_reject_ranges():
    with pytest.raises(ConfigurationError, match="does not accept range configuration"):
        BooleanGenerator().configure(InRange(min="0", max="1"))


def test_both_truth_values(random: RandomSource):
    gen = BooleanGenerator()
    assert {gen.generate(random, STATUS) for _ in range(100)} == {True, False}


def test_sizes_follow_status(random: RandomSource):
    small = SimpleGenerationStatus(size=3)
    assert all(len(StringGenerator().generate(random, small)) <= 3 for _ in range(100))
    assert all(len(BytesGenerator().generate(random, small)) <= 3 for _ in range(100))


def test_sizes_are_capped(random: RandomSource):
    huge = SimpleGenerationStatus(size=10_000)
    with MAX_SIZE.set_local(4):
        assert all(len(StringGenerator("ab").generate(random, huge)) <= 4 for _ in range(100))


def test_string_alphabet(random: RandomSource):
    gen = StringGenerator("xyz")
    assert set("".join(gen.generate(random, STATUS) for _ in range(50))) <= set("xyz")


def test_every_builtin_is_registered_by_name():
    registered = {type(factory()) for factory in GENERATORS.values()}
    assert {type(g) for g in builtin_generators()} <= registered
    assert isinstance(GENERATORS, Registry)


class _Nothing(Generator[None]):
    def __init__(self):
        super().__init__()

    def generate(self, random, status):
        return None


def test_generator_must_claim_a_type():
    with pytest.raises(TypeError, match="must claim at least one type"):
        _Nothing()
