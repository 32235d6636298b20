from enum import Enum
from typing import Optional, Union


class Compass(Enum):
    """Compass selects the side of a node an edge leaves or enters."""

    N = "n"
    NE = "ne"
    E = "e"
    SE = "se"
    S = "s"
    SW = "sw"
    W = "w"
    NW = "nw"
    CENTER = "c"

    @classmethod
    def of(cls, direction: Union["Compass", str]) -> "Compass":
        if isinstance(direction, Compass):
            return direction
        try:
            return cls(direction.lower())
        except (AttributeError, ValueError):
            raise ValueError(f'"{direction}" is not a valid compass direction') from None


class Port:
    """Port qualifies an edge endpoint with a record field and/or a compass point."""

    __slots__ = ("_record", "_compass")

    def __init__(self, record: Optional[str] = None, compass: Optional[Union[Compass, str]] = None):
        self._record = record
        self._compass = Compass.of(compass) if compass is not None else None

    @property
    def record_name(self) -> Optional[str]:
        return self._record

    @property
    def direction(self) -> Optional[Compass]:
        return self._compass

    def is_empty(self) -> bool:
        return self._record is None and self._compass is None

    def record(self, name: str) -> "Port":
        return Port(name, self._compass)

    def compass(self, direction: Union[Compass, str]) -> "Port":
        return Port(self._record, direction)

    def __eq__(self, other):
        if not isinstance(other, Port):
            return NotImplemented
        return self._record == other._record and self._compass == other._compass

    def __hash__(self):
        return hash((self._record, self._compass))

    def __repr__(self):
        return f"<Port record={self._record!r} compass={self._compass}>"


NO_PORT = Port()
