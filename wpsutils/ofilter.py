from collections.abc import Mapping
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Union

from .exceptions import EmptyInput
from .utils import logger

_MISSING = object()


def has_property(obj: Any, name: str) -> bool:
    """Mappings expose their keys as properties, other objects their attributes."""
    if isinstance(obj, Mapping):
        return name in obj
    return hasattr(obj, name)


def get_property(obj: Any, name: str, default: Any = _MISSING) -> Any:
    if isinstance(obj, Mapping):
        value = obj.get(name, default)
    else:
        value = getattr(obj, name, default)
    if value is _MISSING:
        raise AttributeError(f'{obj!r} has no property "{name}"')
    return value


class Check:
    def test(self, value: Any) -> bool:
        raise NotImplementedError

    def __repr__(self):
        return f'<{self.__class__.__name__}>'


class Exists(Check):
    """The property must have a non empty value."""

    def test(self, value):
        return bool(value)


class Equals(Check):
    """The property must be equal to ``value``, compared as case insensitive strings."""

    def __init__(self, value: Any):
        self.value = value

    @staticmethod
    def _normalize(value):
        return '' if value is None else str(value).lower()

    def test(self, value):
        return self._normalize(value) == self._normalize(self.value)

    def __repr__(self):
        return f'<{self.__class__.__name__} {self.value!r}>'


class Predicate(Check):
    """The property value is passed to ``fn`` and the result is used as a boolean."""

    def __init__(self, fn: Callable[[Any], Any]):
        self.fn = fn

    def test(self, value):
        return bool(self.fn(value))

    def __repr__(self):
        return f'<{self.__class__.__name__} {getattr(self.fn, "__name__", self.fn)}>'


class PropertySpec:
    def __init__(self, path: Union[str, Sequence[str]], check: Optional[Check] = None):
        self.path: Tuple[str, ...] = (path,) if isinstance(path, str) else tuple(path)
        if not self.path:
            raise ValueError('A property path requires at least one property name')
        self.check = check or Exists()

    def matches(self, record: Any) -> bool:
        """
        Walk the path down from ``record`` and test the value reached at the end.

        A record missing any property along the path does not match.
        """
        obj = record
        for name in self.path:
            if not has_property(obj, name):
                return False
            obj = get_property(obj, name)
        return self.check.test(obj)

    def __repr__(self):
        return f'<{self.__class__.__name__} {".".join(self.path)} {self.check!r}>'


Properties = Union[str, Mapping, PropertySpec, Sequence]


def _from_mapping(mapping: Mapping, path: Tuple[str, ...] = ()) -> List[PropertySpec]:
    specs = []
    for name, value in mapping.items():
        # an int key is a positional entry: the value names a property that must exist
        if isinstance(name, int) and not isinstance(name, bool):
            if not isinstance(value, str):
                raise TypeError(f'A positional filter property must be a name: {value!r}')
            specs.append(PropertySpec(path + (value,)))
            continue
        if not isinstance(name, str):
            raise TypeError(f'Unexpected filter property name: {name!r}')
        check = Predicate(value) if callable(value) else Equals(value)
        specs.append(PropertySpec(path + (name,), check))
    return specs


def _from_nested(entry: Sequence) -> List[PropertySpec]:
    if not entry:
        raise TypeError('A nested property must contain at least one property name')

    *path, last = entry
    if not all(isinstance(name, str) for name in path):
        raise TypeError(f'Only the last item of a nested property can be a dict: {entry!r}')

    if isinstance(last, str):
        return [PropertySpec(tuple(path) + (last,))]
    if isinstance(last, Mapping):
        return _from_mapping(last, tuple(path))
    raise TypeError(f'The last item of a nested property must be a name or a dict: {entry!r}')


def parse_properties(properties: Properties) -> List[PropertySpec]:
    """
    Convert the filter criteria to a list of ``PropertySpec``.

    :param properties: One of:

        - ``'size'``: the ``size`` property must have a non empty value
        - ``{'size': 3}``: ``size`` must be equal to 3, with case insensitive string
          comparison
        - ``{'age': lambda age: 18 < age < 50}``: the function must return a true value
        - ``{0: 'name'}``: an int key is positional, the ``name`` property must have a
          non empty value, so ``[{0: 'name', 'size': 3}]`` mixes both forms
        - a list or tuple combining the above, and nested properties like
          ``['user', {'forename': 'Bob'}]`` or ``['user', 'forename']``, where the
          leading names are the path to the object that must match the last item
        - ``PropertySpec`` instances
    :return: The list of specs, all of them must match.
    """
    if isinstance(properties, PropertySpec):
        return [properties]
    if isinstance(properties, str):
        return [PropertySpec(properties)]
    if isinstance(properties, Mapping):
        return _from_mapping(properties)
    if not isinstance(properties, (list, tuple)):
        raise TypeError(f'Unexpected filter properties: {properties!r}')

    specs = []
    for entry in properties:
        if isinstance(entry, PropertySpec):
            specs.append(entry)
        elif isinstance(entry, str):
            specs.append(PropertySpec(entry))
        elif isinstance(entry, Mapping):
            specs.extend(_from_mapping(entry))
        elif isinstance(entry, (list, tuple)):
            specs.extend(_from_nested(entry))
        else:
            raise TypeError(f'Unexpected filter property: {entry!r}')
    return specs


def ofilter(records: Iterable, properties: Properties) -> list:
    """
    Filter a list of objects or dicts on one or more properties.

    :param records: The objects to filter.
    :param properties: The criteria, see ``parse_properties``.
    :return: A new list with the records matching all the criteria, in their original order.
    :raises EmptyInput: If there are no records to filter.

    Example::

        ofilter(items, 'size')
        ofilter(items, [{'size': 3}, 'name'])
        ofilter(items, ['size', ['user', {'forename': 'Bob'}], ['user', {'age': 30}]])
        ofilter(items, {'size': lambda size: 18 < size < 50})

    Exceptions raised by predicate functions are not caught.
    """
    records = list(records or [])
    if not records:
        raise EmptyInput('Impossible to filter an empty list of records.')

    specs = parse_properties(properties)
    result = [record for record in records if all(spec.matches(record) for spec in specs)]

    logger.debug(f'ofilter kept {len(result)} of {len(records)} records with {specs}')
    return result
