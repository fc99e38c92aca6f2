from vec.memory.errors import VectorError, OutOfRangeError, LengthLimitError, AllocationError
from vec.memory.allocator import Block, Allocator, DefaultAllocator
