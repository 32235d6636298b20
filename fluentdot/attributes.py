from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional, Union

from .label import Label

AttrValue = Union[str, Label]


def _value(value: Any) -> AttrValue:
    if isinstance(value, Label):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Attributes(Mapping):
    """Attributes is an ordered, immutable table of attribute values.

    Keys keep the position they were first inserted at, so iterating a
    table is deterministic. Setting a known key replaces its value in place.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Optional[Mapping[str, Any]] = None, **attrs: Any):
        table: Dict[str, AttrValue] = {}
        for source in (items or {}, attrs):
            for k, v in source.items():
                table[str(k)] = _value(v)
        self._items = table

    def __getitem__(self, key: str) -> AttrValue:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self):
        return f"Attributes({self._items!r})"

    def is_empty(self) -> bool:
        return not self._items

    def merge(self, other: Mapping) -> "Attributes":
        """Return a new table with the entries of other laid over this one."""
        if not other:
            return self
        return Attributes({**self._items, **other})

    def with_attr(self, key: str, value: Any) -> "Attributes":
        return self.merge({key: value})


EMPTY = Attributes()


class Attributed:
    """Attributed is anything holding an attribute table.

    Subclasses provide the table through the attributes property and
    decide in _with_attributes what an update returns.
    """

    _attributes: Attributes = EMPTY

    @property
    def attributes(self) -> Attributes:
        return self._attributes

    def attr(self, key: str, value: Any):
        """Set a single attribute.

        :param key: Attribute name.
        :param value: Attribute value, text or a markup Label.
        :return: The updated owner.
        """
        return self._with_attributes(self.attributes.with_attr(key, value))

    def attrs(self, attrs: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        """Set several attributes at once, in the given order."""
        return self._with_attributes(self.attributes.merge(Attributes(attrs, **kwargs)))

    def _with_attributes(self, attributes: Attributes):
        raise NotImplementedError


class AttributeView(Attributed):
    """AttributeView exposes one attribute table of an owner object.

    Updates go through the owner's _replace_table, so the owner decides
    whether it is copied or changed in place.
    """

    def __init__(self, owner: Any, slot: str):
        self._owner = owner
        self._slot = slot

    @property
    def attributes(self) -> Attributes:
        return getattr(self._owner, self._slot)

    def _with_attributes(self, attributes: Attributes):
        return self._owner._replace_table(self._slot, attributes)

    def __repr__(self):
        return f"<{self.__class__.__name__} {self._slot.strip('_')} of {self._owner!r}>"
