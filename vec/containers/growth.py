from typing import Union
from math import ceil

from vec import config
from vec.memory.errors import LengthLimitError


# -----------------------------------------------------------------------------


class GrowthPolicy:
    """ Decides the capacity of a container that needs at least one more slot.

        New capacity is `factor * (length + 1)` rounded up, clamped to the
        allocator limit. Any factor above 1 keeps appends amortized O(1).
    """

    def __init__(self, factor: 'Union[int, float]' = config.DEFAULT_GROWTH_FACTOR) -> 'None':
        if not factor > 1:
            raise ValueError(f"Growth factor must be greater than 1, got {factor}")
        self.__factor = factor

    @property
    def factor(self) -> 'Union[int, float]':
        return self.__factor

    def next_capacity(self, length: 'int', limit: 'int') -> 'int':
        required = length + 1
        if required > limit:
            raise LengthLimitError(required, limit)
        return min(max(ceil(self.__factor * required), required), limit)

    def __repr__(self) -> 'str':
        return f'GrowthPolicy(factor={self.__factor})'


# -----------------------------------------------------------------------------
