from typing import Any, Optional, List, Dict

from vec.bench import InjectedFailure, Countdown, Fragile
from vec.memory import Block, DefaultAllocator


# -----------------------------------------------------------------------------


def fragile(countdown: 'Countdown', *values: 'Any') -> 'List[Fragile]':
    return [Fragile(v, countdown) for v in values]


def values_of(items) -> 'List[Any]':
    return [e.value for e in items]


# -----------------------------------------------------------------------------


class TrackingAllocator(DefaultAllocator):
    """ Allocator recording every call, used to detect leaks.
    """

    def __init__(self, limit: 'Optional[int]' = None) -> 'None':
        super().__init__(limit)
        self.outstanding: 'Dict[int, Block]' = {}
        self.allocations = 0
        self.deallocations = 0
        self.constructed = 0
        self.destroyed: 'List[int]' = []

    def allocate(self, n: 'int') -> 'Block':
        block = super().allocate(n)
        self.allocations += 1
        self.outstanding[id(block)] = block
        return block

    def deallocate(self, block: 'Block', n: 'int') -> 'None':
        assert id(block) in self.outstanding, "unknown or already released block"
        del self.outstanding[id(block)]
        self.deallocations += 1
        super().deallocate(block, n)

    def construct(self, block: 'Block', index: 'int', value: 'Any') -> 'None':
        super().construct(block, index, value)
        self.constructed += 1

    def destroy(self, block: 'Block', index: 'int') -> 'None':
        super().destroy(block, index)
        self.destroyed.append(index)

    @property
    def live(self) -> 'int':
        return self.constructed - len(self.destroyed)


# -----------------------------------------------------------------------------
