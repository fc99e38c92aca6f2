from typing import Any, List, Optional
from typing_extensions import Protocol
from abc import abstractmethod
from copy import copy

from vec import config
from vec.memory.errors import AllocationError


# -----------------------------------------------------------------------------


class _Vacant:
    # Vacancy is tested by identity, so copies and unpickling yield the singleton
    def __copy__(self) -> '_Vacant':
        return self

    def __deepcopy__(self, memo: 'Any') -> '_Vacant':
        return self

    def __reduce__(self) -> 'str':
        return '_VACANT'

    def __repr__(self) -> 'str':
        return '<vacant>'


_VACANT = _Vacant()


class Block:
    """ Contiguous run of slots handed out by an allocator.

        A slot is either vacant (allocated memory without a live object)
        or live. The block neither copies nor validates values, that is
        the job of the allocator that constructs into it. Misuse (loading
        a vacant slot, constructing over a live one, touching a released
        block) is checked by assertions only.
    """

    def __init__(self, capacity: 'int') -> 'None':
        self.__slots: 'List[Any]' = [_VACANT] * capacity
        self.__released = False

    @property
    def capacity(self) -> 'int':
        return len(self.__slots)

    @property
    def released(self) -> 'bool':
        return self.__released

    def is_live(self, index: 'int') -> 'bool':
        return self.__slots[index] is not _VACANT

    def live_count(self) -> 'int':
        return sum(1 for v in self.__slots if v is not _VACANT)

    def load(self, index: 'int') -> 'Any':
        assert not self.__released and 0 <= index < len(self.__slots)
        v = self.__slots[index]
        assert v is not _VACANT, f"slot {index} holds no live object"
        return v

    def store(self, index: 'int', value: 'Any') -> 'None':
        assert not self.__released and 0 <= index < len(self.__slots)
        assert self.__slots[index] is _VACANT, f"slot {index} is already live"
        self.__slots[index] = value

    def replace(self, index: 'int', value: 'Any') -> 'None':
        assert not self.__released and self.is_live(index)
        self.__slots[index] = value

    def erase(self, index: 'int') -> 'None':
        assert not self.__released and 0 <= index < len(self.__slots)
        assert self.__slots[index] is not _VACANT, f"slot {index} destroyed twice"
        self.__slots[index] = _VACANT

    def release(self) -> 'None':
        assert not self.__released, "block released twice"
        assert self.live_count() == 0, "block released with live objects"
        self.__released = True
        self.__slots = []

    def __repr__(self) -> 'str':
        state = 'released' if self.__released else f'{self.live_count()}/{self.capacity}'
        return f'Block({state})'


# -----------------------------------------------------------------------------


class Allocator(Protocol):
    """ Storage strategy injected into a container.

        Every allocate/construct/destroy/deallocate performed by a
        container goes through its allocator. A slot is addressed as
        a `(block, index)` pair.
    """

    @abstractmethod
    def allocate(self, n: 'int') -> 'Block':
        pass

    @abstractmethod
    def deallocate(self, block: 'Block', n: 'int') -> 'None':
        pass

    @abstractmethod
    def construct(self, block: 'Block', index: 'int', value: 'Any') -> 'None':
        pass

    @abstractmethod
    def destroy(self, block: 'Block', index: 'int') -> 'None':
        pass

    @abstractmethod
    def max_size(self) -> 'int':
        pass


class DefaultAllocator:
    """ Stateless allocator giving stored elements value semantics.

        `construct` stores a shallow copy made with `copy.copy`, so a
        constructed element never aliases its source; a failing `__copy__`
        of the element type surfaces from here. Assigning to an already
        live slot (`v[i] = x`, `cursor.value = x`) does not construct and
        stores `x` itself, like item assignment on a list.
    """

    def __init__(self, limit: 'Optional[int]' = None) -> 'None':
        self.__limit = config.DEFAULT_MAX_SIZE if limit is None else limit

    def allocate(self, n: 'int') -> 'Block':
        if n < 0 or n > self.__limit:
            raise AllocationError(f"Cannot allocate {n} slots (limit is {self.__limit})")
        return Block(n)

    def deallocate(self, block: 'Block', n: 'int') -> 'None':
        assert block.capacity == n, "deallocation size differs from allocation size"
        block.release()

    def construct(self, block: 'Block', index: 'int', value: 'Any') -> 'None':
        block.store(index, copy(value))

    def destroy(self, block: 'Block', index: 'int') -> 'None':
        block.erase(index)

    def max_size(self) -> 'int':
        return self.__limit

    def __eq__(self, other) -> 'bool':
        return type(self) is type(other) and self.max_size() == other.max_size()

    def __hash__(self) -> 'int':
        return hash((type(self), self.__limit))

    def __repr__(self) -> 'str':
        return f'{type(self).__name__}(limit={self.__limit})'


# -----------------------------------------------------------------------------
