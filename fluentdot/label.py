from typing import Union


class Label:
    """Label is the name of a graph or node, either plain text or markup.

    Plain labels are quoted and escaped when serialized, markup labels are
    written verbatim between angle brackets.
    """

    __slots__ = ("_value", "_html")

    def __init__(self, value: str = "", html: bool = False):
        self._value = str(value)
        self._html = html

    @classmethod
    def of(cls, value: Union["Label", str]) -> "Label":
        if isinstance(value, Label):
            return value
        return cls(value)

    @classmethod
    def markup(cls, value: str) -> "Label":
        return cls(value, html=True)

    @property
    def value(self) -> str:
        return self._value

    @property
    def html(self) -> bool:
        return self._html

    @property
    def anonymous(self) -> bool:
        return not self._value

    def __eq__(self, other):
        if not isinstance(other, Label):
            return NotImplemented
        return self._value == other._value and self._html == other._html

    def __hash__(self):
        return hash((self._value, self._html))

    def __str__(self) -> str:
        return self._value

    def __repr__(self):
        if self._html:
            return f"<Label <{self._value}>>"
        return f"<Label {self._value!r}>"
