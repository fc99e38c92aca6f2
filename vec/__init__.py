from vec.memory import VectorError, OutOfRangeError, LengthLimitError, AllocationError, \
    Block, Allocator, DefaultAllocator
from vec.containers import Cursor, ReverseCursor, GrowthPolicy, VectorBase, Vector
