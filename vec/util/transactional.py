from typing import Any, Optional, Iterable, Type
from types import TracebackType
import logging

from vec.memory.allocator import Allocator, Block


logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------


class Transaction:
    """ Construction of values into consecutive raw slots of a block.

        Slots are constructed one at a time starting at `start`. Until
        `commit` is called, `rollback` destroys every slot constructed by
        this transaction in reverse order and leaves the target range
        in the fully unconstructed state it started in.

        Used as a context manager, a transaction that is left by an
        exception is rolled back and the exception propagates unchanged.
        Leaving the block normally commits it.
    """

    __allocator: 'Allocator'
    __block: 'Block'
    __start: 'int'
    __count: 'int'
    __open: 'bool'

    def __init__(self, allocator: 'Allocator', block: 'Block', start: 'int' = 0) -> 'None':
        self.__allocator, self.__block = allocator, block
        self.__start, self.__count = start, 0
        self.__open = True

    @property
    def count(self) -> 'int':
        """ Returns the number of slots constructed so far.
        """
        return self.__count

    @property
    def stop(self) -> 'int':
        """ Returns the index of the next slot to construct.
        """
        return self.__start + self.__count

    def construct(self, value: 'Any') -> 'None':
        assert self.__open
        self.__allocator.construct(self.__block, self.stop, value)
        self.__count += 1

    def commit(self) -> 'int':
        assert self.__open
        self.__open = False
        return self.__count

    def rollback(self) -> 'None':
        assert self.__open
        self.__open = False
        if self.__count > 0:
            logger.debug("Rolling back %d constructed slots", self.__count)
        destroy_range(self.__allocator, self.__block, self.__start, self.stop)
        self.__count = 0

    def __enter__(self) -> 'Transaction':
        return self

    def __exit__(self, exc_type: 'Optional[Type[BaseException]]',
                 exc: 'Optional[BaseException]', tb: 'Optional[TracebackType]') -> 'None':
        if not self.__open:
            return
        if exc_type is None:
            self.commit()
        else:
            self.rollback()


# -----------------------------------------------------------------------------


def uninitialized_fill(allocator: 'Allocator', block: 'Block', start: 'int', count: 'int', value: 'Any') -> 'int':
    """ Constructs `count` copies of `value` into raw slots beginning at `start`.
        Either all of them are constructed or none is.
    """
    with Transaction(allocator, block, start) as t:
        for _ in range(count):
            t.construct(value)
        return t.commit()


def uninitialized_copy(allocator: 'Allocator', values: 'Iterable[Any]', block: 'Block', start: 'int') -> 'int':
    """ Copy-constructs every item of `values` into raw slots beginning at `start`.
        Either all of them are constructed or none is.
    """
    with Transaction(allocator, block, start) as t:
        for v in values:
            t.construct(v)
        return t.commit()


def destroy_range(allocator: 'Allocator', block: 'Block', start: 'int', stop: 'int') -> 'None':
    for i in reversed(range(start, stop)):
        allocator.destroy(block, i)


def discard_block(allocator: 'Allocator', block: 'Optional[Block]', count: 'int') -> 'None':
    """ Destroys the first `count` live slots of `block` and gives it back
        to the allocator.
    """
    if block is None:
        return
    destroy_range(allocator, block, 0, count)
    allocator.deallocate(block, block.capacity)


# -----------------------------------------------------------------------------
