from typing import Any, Optional, Union, Iterator
from functools import total_ordering

from vec.memory.allocator import Block


# -----------------------------------------------------------------------------


@total_ordering
class Cursor:
    """ Random-access position within the storage of a container.

        A cursor is a raw (block, index) pair: it is immutable, hashable
        and comparable, and every operation is defined by the index alone.
        There is no bounds checking. The caller must keep the index within
        the live elements and must not use a cursor after the container
        has reallocated (the old block is released by then, which debug
        assertions catch).

        Increment and decrement rebind: `c = c.next` or `c += 1`.
    """

    def __init__(self, block: 'Optional[Block]', index: 'int') -> 'None':
        self.__block, self.__index = block, index

    @property
    def block(self) -> 'Optional[Block]':
        return self.__block

    @property
    def index(self) -> 'int':
        return self.__index

    @property
    def value(self) -> 'Any':
        """ Dereferences the cursor.
        """
        assert self.__block is not None
        return self.__block.load(self.__index)

    @value.setter
    def value(self, v: 'Any') -> 'None':
        """ Replaces the live element with `v` itself (no copy is made).
        """
        assert self.__block is not None
        self.__block.replace(self.__index, v)

    @property
    def next(self) -> 'Cursor':
        return Cursor(self.__block, self.__index + 1)

    @property
    def prev(self) -> 'Cursor':
        return Cursor(self.__block, self.__index - 1)

    def __getitem__(self, n: 'int') -> 'Any':
        return (self + n).value

    def __setitem__(self, n: 'int', v: 'Any') -> 'None':
        (self + n).value = v

    def __add__(self, n: 'int') -> 'Cursor':
        return Cursor(self.__block, self.__index + n)

    __radd__ = __add__

    def __sub__(self, other: 'Union[int, Cursor]') -> 'Any':
        if isinstance(other, Cursor):
            assert self.__block is other.__block, "cursors of different storage"
            return self.__index - other.__index
        return Cursor(self.__block, self.__index - other)

    def __eq__(self, other) -> 'bool':
        if not isinstance(other, Cursor):
            return NotImplemented
        return self.__block is other.__block and self.__index == other.__index

    def __lt__(self, other: 'Cursor') -> 'bool':
        assert self.__block is other.__block, "cursors of different storage"
        return self.__index < other.__index

    def __hash__(self) -> 'int':
        return hash((id(self.__block), self.__index))

    def __repr__(self) -> 'str':
        return f'Cursor({self.__index})'


# -----------------------------------------------------------------------------


@total_ordering
class ReverseCursor:
    """ Adaptor that walks an underlying cursor backwards.

        A reverse cursor over base position `i` refers to the element at
        `i - 1`, so `ReverseCursor(end)` is the first element of the
        reversed sequence and `ReverseCursor(begin)` is past its end.
    """

    def __init__(self, base: 'Cursor') -> 'None':
        self.__base = base

    @property
    def base(self) -> 'Cursor':
        return self.__base

    @property
    def value(self) -> 'Any':
        return self.__base.prev.value

    @value.setter
    def value(self, v: 'Any') -> 'None':
        self.__base.prev.value = v

    @property
    def next(self) -> 'ReverseCursor':
        return ReverseCursor(self.__base.prev)

    @property
    def prev(self) -> 'ReverseCursor':
        return ReverseCursor(self.__base.next)

    def __getitem__(self, n: 'int') -> 'Any':
        return self.__base[-n - 1]

    def __setitem__(self, n: 'int', v: 'Any') -> 'None':
        self.__base[-n - 1] = v

    def __add__(self, n: 'int') -> 'ReverseCursor':
        return ReverseCursor(self.__base - n)

    __radd__ = __add__

    def __sub__(self, other: 'Union[int, ReverseCursor]') -> 'Any':
        if isinstance(other, ReverseCursor):
            return other.__base - self.__base
        return ReverseCursor(self.__base + other)

    def __eq__(self, other) -> 'bool':
        if not isinstance(other, ReverseCursor):
            return NotImplemented
        return self.__base == other.__base

    def __lt__(self, other: 'ReverseCursor') -> 'bool':
        return self.__base > other.__base

    def __hash__(self) -> 'int':
        return hash(self.__base)

    def __repr__(self) -> 'str':
        return f'ReverseCursor({self.__base.index})'


# -----------------------------------------------------------------------------


AnyCursor = Union[Cursor, ReverseCursor]


def distance(first: 'AnyCursor', last: 'AnyCursor') -> 'int':
    return last - first


def iterate(first: 'AnyCursor', last: 'AnyCursor') -> 'Iterator[Any]':
    """ Yields values from `first` up to, but not including, `last`.
    """
    while first != last:
        yield first.value
        first = first.next


# -----------------------------------------------------------------------------
