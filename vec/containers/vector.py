from typing import Any, Optional, Tuple, Iterable, Iterator, Sized, TypeVar, Generic, Type
from types import TracebackType
from abc import ABC, abstractmethod
from itertools import chain, islice, repeat
import logging

from vec.memory.allocator import Allocator, Block, DefaultAllocator
from vec.memory.errors import OutOfRangeError, LengthLimitError
from vec.util.transactional import uninitialized_copy, destroy_range, discard_block
from vec.containers.growth import GrowthPolicy
from vec.containers.cursor import Cursor, ReverseCursor, AnyCursor, distance, iterate


logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------


_E = TypeVar('_E')


class VectorBase(Generic[_E], ABC):
    @abstractmethod
    def _get_count(self) -> 'int':
        pass

    @abstractmethod
    def _get_element(self, index: 'int') -> '_E':
        pass

    @abstractmethod
    def _set_element(self, index: 'int', e: '_E') -> 'None':
        pass

    def at(self, index: 'int') -> '_E':
        """ Bounds-checked element access.
        """
        count = self._get_count()
        if index < 0 or index >= count:
            raise OutOfRangeError(index, count)
        return self._get_element(index)

    def front(self) -> '_E':
        return self.at(0)

    def back(self) -> '_E':
        return self.at(self._get_count() - 1)

    def empty(self) -> 'bool':
        return self._get_count() == 0

    def size(self) -> 'int':
        return self._get_count()

    def __getitem__(self, index: 'int') -> '_E':
        """ Unchecked element access: `index` must lie in `[0, len(self))`.
        """
        assert 0 <= index < self._get_count(), f"index {index} out of range"
        return self._get_element(index)

    def __setitem__(self, index: 'int', e: '_E') -> 'None':
        """ Unchecked element assignment. The live element is replaced by
            `e` itself, not by a copy, as with item assignment on a list.
        """
        assert 0 <= index < self._get_count(), f"index {index} out of range"
        self._set_element(index, e)

    def __iter__(self) -> 'Iterator[_E]':
        return (self._get_element(i) for i in range(self._get_count()))

    def __reversed__(self) -> 'Iterator[_E]':
        return (self._get_element(i) for i in reversed(range(self._get_count())))

    def __len__(self) -> 'int':
        return self._get_count()

    def __eq__(self, other) -> 'bool':
        if not isinstance(other, VectorBase):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    __hash__ = None  # type: ignore


# -----------------------------------------------------------------------------


def _block_of(c: 'AnyCursor') -> 'Optional[Block]':
    while isinstance(c, ReverseCursor):
        c = c.base
    return c.block


class Vector(Generic[_E], VectorBase[_E]):
    """ Resizable array owning one contiguous block of storage.

        Exactly the first `size()` slots of the block hold live elements,
        slots up to `capacity()` are allocated but vacant. A zero-capacity
        vector owns no block at all. Storage is replaced only by building
        a complete new block first and releasing the old one afterwards.

        Failure guarantees per operation:

        * construction, `copy`, `copy_from`, `reserve`, `append` and the
          reallocating paths of `assign` and `insert` are strong: on
          failure the vector is left exactly as it was;
        * `assign` and `insert` that fit into the current capacity are
          basic: on failure the vector is left valid but empty.

        Failures of element copies propagate unchanged.
    """

    __allocator: 'Allocator'
    __growth: 'GrowthPolicy'
    __block: 'Optional[Block]'
    __count: 'int'
    __capacity: 'int'

    def __init__(self, count: 'int' = 0, value: 'Optional[_E]' = None, *,
                 allocator: 'Optional[Allocator]' = None,
                 growth: 'Optional[GrowthPolicy]' = None) -> 'None':
        """ Creates a vector of `count` copies of `value`, with capacity
            equal to `count`.
        """
        self.__allocator = DefaultAllocator() if allocator is None else allocator
        self.__growth = GrowthPolicy() if growth is None else growth
        self.__block, self.__count, self.__capacity = None, 0, 0
        if count < 0:
            raise ValueError(f"Element count must not be negative, got {count}")
        if count > 0:
            self.__check_limit(count)
            self.__replace(count, repeat(value, count), count)

    @classmethod
    def from_range(cls, first: 'Any', last: 'Optional[AnyCursor]' = None, *,
                   allocator: 'Optional[Allocator]' = None,
                   growth: 'Optional[GrowthPolicy]' = None) -> 'Vector':
        """ Creates a vector holding copies of the values in `[first, last)`.
            If `last` is omitted, `first` may be any iterable.
        """
        v: 'Vector' = cls(allocator=allocator, growth=growth)
        count, values = v.__measure(first, last)
        if count > 0:
            v.__check_limit(count)
            v.__replace(count, values, count)
        return v

    def copy(self) -> 'Vector[_E]':
        """ Returns an independent copy sharing this vector's allocator
            and growth policy.
        """
        return type(self).from_range(self, allocator=self.__allocator, growth=self.__growth)

    __copy__ = copy

    def copy_from(self, other: 'Vector[_E]') -> 'None':
        """ Copy assignment with strong guarantee.
        """
        if other is self:
            return
        count = len(other)
        self.__check_limit(count)
        self.__replace(count, iter(other), count)

    def dispose(self) -> 'None':
        """ Destroys all elements and releases storage. The vector remains
            usable and empty afterwards.
        """
        discard_block(self.__allocator, self.__block, self.__count)
        self.__block, self.__count, self.__capacity = None, 0, 0

    def __enter__(self) -> 'Vector[_E]':
        return self

    def __exit__(self, exc_type: 'Optional[Type[BaseException]]',
                 exc: 'Optional[BaseException]', tb: 'Optional[TracebackType]') -> 'None':
        self.dispose()

    def get_allocator(self) -> 'Allocator':
        return self.__allocator

    # Capacity

    def capacity(self) -> 'int':
        return self.__capacity

    def max_size(self) -> 'int':
        return self.__allocator.max_size()

    def reserve(self, requested: 'int') -> 'None':
        if requested <= self.__capacity:
            return
        self.__check_limit(requested)
        self.__replace(requested, iter(self), self.__count)

    # Cursors

    def begin(self) -> 'Cursor':
        return Cursor(self.__block, 0)

    def data(self) -> 'Cursor':
        """ Returns a raw cursor to the start of storage. Only the first
            `size()` slots may be dereferenced.
        """
        return self.begin()

    def end(self) -> 'Cursor':
        return Cursor(self.__block, self.__count)

    def rbegin(self) -> 'ReverseCursor':
        return ReverseCursor(self.end())

    def rend(self) -> 'ReverseCursor':
        return ReverseCursor(self.begin())

    # Modifiers

    def clear(self) -> 'None':
        if self.__block is not None:
            destroy_range(self.__allocator, self.__block, 0, self.__count)
        self.__count = 0

    def assign(self, first: 'Any', last: 'Any' = None) -> 'None':
        """ Replaces the contents with `first` copies of `last` when `first`
            is an int, otherwise with the values in `[first, last)` (or of
            the iterable `first` when `last` is omitted).
        """
        if isinstance(first, int):
            if first < 0:
                raise ValueError(f"Element count must not be negative, got {first}")
            count, values = first, repeat(last, first)
        else:
            count, values = self.__measure(first, last)

        if count <= self.__capacity:
            self.clear()
            if count > 0:
                assert self.__block is not None
                self.__count = uninitialized_copy(self.__allocator, values, self.__block, 0)
        else:
            self.__check_limit(count)
            self.__replace(count, values, count)

    def insert(self, position: 'Cursor', value: '_E') -> 'Cursor':
        """ Inserts `value` before `position` and returns a cursor to it.
        """
        index = position - self.begin()
        assert 0 <= index <= self.__count, f"insert position {index} out of range"
        if self.__count < self.__capacity:
            self.__insert_in_place(index, value)
        else:
            capacity = self.__growth.next_capacity(self.__count, self.max_size())
            values = chain(islice(self, index), (value,), islice(self, index, None))
            self.__replace(capacity, values, self.__count + 1)
        return Cursor(self.__block, index)

    def append(self, value: '_E') -> 'None':
        self.insert(self.end(), value)

    def pop(self) -> '_E':
        """ Removes the last element and returns it.
        """
        if self.__count == 0:
            raise OutOfRangeError(-1, 0)
        assert self.__block is not None
        self.__count -= 1
        e = self.__block.load(self.__count)
        self.__allocator.destroy(self.__block, self.__count)
        return e

    # Element storage

    def _get_count(self) -> 'int':
        return self.__count

    def _get_element(self, index: 'int') -> '_E':
        assert self.__block is not None
        return self.__block.load(index)

    def _set_element(self, index: 'int', e: '_E') -> 'None':
        assert self.__block is not None
        self.__block.replace(index, e)

    def __repr__(self) -> 'str':
        return f'{type(self).__name__}({list(self)!r})'

    # Internals

    def __check_limit(self, requested: 'int') -> 'None':
        limit = self.max_size()
        if requested > limit:
            raise LengthLimitError(requested, limit)

    def __measure(self, first: 'Any', last: 'Optional[AnyCursor]') -> 'Tuple[int, Iterable[Any]]':
        if last is None:
            if isinstance(first, (Cursor, ReverseCursor)):
                raise TypeError("A cursor range needs both ends")
            if isinstance(first, Sized) and first is not self:
                return len(first), first
            items = list(first)
            return len(items), items
        if not isinstance(first, (Cursor, ReverseCursor)):
            raise TypeError(f"Cannot measure range starting at {first!r}")
        count = distance(first, last)
        if count < 0:
            raise ValueError("Range end precedes its beginning")
        if self.__block is not None and _block_of(first) is self.__block:
            # Own elements may be destroyed before they are read
            items = list(iterate(first, last))
            return len(items), items
        return count, iterate(first, last)

    def __replace(self, capacity: 'int', values: 'Iterable[Any]', count: 'int') -> 'None':
        """ Builds a new block of `capacity` slots holding `count` values and
            adopts it. The current block is only released once the new one
            is complete.
        """
        if capacity == 0:
            discard_block(self.__allocator, self.__block, self.__count)
            self.__block, self.__count, self.__capacity = None, 0, 0
            return
        block = self.__allocator.allocate(capacity)
        try:
            built = uninitialized_copy(self.__allocator, values, block, 0)
        except BaseException:
            self.__allocator.deallocate(block, capacity)
            raise
        assert built == count, f"built {built} elements, expected {count}"
        if self.__block is not None:
            logger.debug("Reallocating storage from %d to %d slots", self.__capacity, capacity)
        discard_block(self.__allocator, self.__block, self.__count)
        self.__block, self.__count, self.__capacity = block, built, capacity

    def __insert_in_place(self, index: 'int', value: '_E') -> 'None':
        allocator, block, count = self.__allocator, self.__block, self.__count
        assert block is not None
        if index == count:
            allocator.construct(block, count, value)
            self.__count += 1
            return

        # Nothing is touched yet if the new top slot cannot be built
        allocator.construct(block, count, block.load(count - 1))
        hole = count - 1
        try:
            allocator.destroy(block, hole)
            while hole > index:
                allocator.construct(block, hole, block.load(hole - 1))
                hole -= 1
                allocator.destroy(block, hole)
            allocator.construct(block, index, value)
        except BaseException:
            # Every slot of [0, count] but the hole is live
            logger.debug("Insert failed while shifting, discarding %d elements", count)
            destroy_range(allocator, block, hole + 1, count + 1)
            destroy_range(allocator, block, 0, hole)
            self.__count = 0
            raise
        self.__count += 1


# -----------------------------------------------------------------------------
