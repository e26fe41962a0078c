"""Runtime reasoning about requested types.

`is_assignable(target, source)` is the single compatibility rule used both when binding explicit
generators and when looking generators up in a repository: a generator claiming `source` may be used
for a parameter declared as `target` iff values of `source` can stand in wherever `target` is expected.
Type arguments are compared covariantly.
"""

import typing as ty
from typing import Any, Tuple, Type, get_args, get_origin

from typing_inspect import is_literal_type, is_typevar, is_union_type

from thds.attrs_utils.type_utils import is_enum_type, newtype_base, unwrap_annotated  # noqa: F401

NoneType = type(None)


def strip(type_: Any) -> Any:
    """Remove the wrappers that don't change what values look like at runtime:
    `Annotated[...]` and `NewType`s, recursively. `None` is read as `NoneType`."""
    if type_ is None:
        return NoneType
    while True:
        unwrapped = newtype_base(unwrap_annotated(type_))
        if unwrapped is type_:
            return type_
        type_ = unwrapped


def literal_values(type_: Type) -> Tuple[Any, ...]:
    assert is_literal_type(type_)
    return get_args(type_)


def raw_type(type_: Any) -> Any:
    """The class underlying a possibly-parameterized type, e.g. `list` for `List[int]`.
    Types with no class behind them (unions, literals, type variables) come back stripped but otherwise
    unchanged."""
    type_ = strip(type_)
    origin = get_origin(type_)
    return origin if isinstance(origin, type) else type_


def is_raw_generic(type_: Any) -> bool:
    """A class which can be parameterized, used without parameters, e.g. `list` or `typing.List`."""
    return isinstance(type_, type) and hasattr(type_, "__class_getitem__") and not get_args(type_)


def _typevar_bound(tv: Any) -> Any:
    if tv.__constraints__:
        return ty.Union[tv.__constraints__]  # type: ignore[valid-type]
    return tv.__bound__ or object


def _same_literal(a: Any, b: Any) -> bool:
    return type(a) is type(b) and a == b


def _is_variadic(args: Tuple) -> bool:
    return len(args) == 2 and args[-1] is Ellipsis


def _tuple_args_assignable(target_args: Tuple, source_args: Tuple) -> bool:
    if _is_variadic(target_args):
        elem = target_args[0]
        return all(is_assignable(elem, s) for s in source_args if s is not Ellipsis)
    if _is_variadic(source_args):
        return False
    return len(target_args) == len(source_args) and all(
        is_assignable(t, s) for t, s in zip(target_args, source_args)
    )


def _is_class_assignable(target: Any, source: Any) -> bool:
    target_origin = get_origin(target) or target
    source_origin = get_origin(source) or source
    if not (isinstance(target_origin, type) and isinstance(source_origin, type)):
        return target == source
    try:
        if not issubclass(source_origin, target_origin):
            return False
    except TypeError:
        # e.g. non-runtime-checkable protocols
        return False

    target_args = get_args(target)
    source_args = get_args(source)
    if not target_args:
        return True
    if not source_args:
        # unchecked: a raw generic class may be parameterized however the target needs
        return is_raw_generic(source_origin)
    if target_origin is tuple:
        return _tuple_args_assignable(target_args, source_args)
    return len(target_args) == len(source_args) and all(
        is_assignable(t, s) for t, s in zip(target_args, source_args)
    )


def is_assignable(target: Any, source: Any) -> bool:
    """True iff a value of type `source` may be used where a `target` is expected."""
    target = strip(target)
    source = strip(source)

    if target is Any or target is object or source is Any:
        return True
    if is_typevar(source):
        return is_assignable(target, _typevar_bound(source))
    if is_typevar(target):
        return is_assignable(_typevar_bound(target), source)

    if is_union_type(source):
        return all(is_assignable(target, arg) for arg in get_args(source))
    if is_union_type(target):
        return any(is_assignable(arg, source) for arg in get_args(target))

    if is_literal_type(source):
        values = literal_values(source)
        if is_literal_type(target):
            allowed = literal_values(target)
            return all(any(_same_literal(v, a) for a in allowed) for v in values)
        return all(is_assignable(target, type(v)) for v in values)
    if is_literal_type(target):
        return False

    return _is_class_assignable(target, source)


def type_name(type_: Any) -> str:
    if isinstance(type_, type) and not get_args(type_):
        return type_.__qualname__
    return repr(type_)
