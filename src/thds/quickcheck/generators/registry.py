import typing as ty

from thds.attrs_utils.registry import Registry

from ..generator import Generator

GeneratorFactory = ty.Callable[[], Generator]


class GeneratorFactoryRegistry(Registry[str, GeneratorFactory]):
    # This class def only exists because of the mypy error "Type variable is unbound".
    pass


# stable names for generators, so that they can be bound to parameters without importing them
GENERATORS = GeneratorFactoryRegistry()


def register_generator(name: str) -> ty.Callable[[GeneratorFactory], GeneratorFactory]:
    """Register a generator class (or any zero-argument factory of generators) under a name usable in
    `From(...)`.

    Example:

        @register_generator("even")
        class EvenGenerator(Generator[int]):
            ...
    """
    return GENERATORS.register(name)
