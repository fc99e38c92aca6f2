# -----------------------------------------------------------------------------


class VectorError(Exception):
    """ Base class of failures signaled by the container itself.

        Failures raised by element operations (copying a stored value) are
        never wrapped into this hierarchy, they propagate unchanged.
    """


class OutOfRangeError(VectorError, IndexError):
    """ Raised by bounds-checked access with index outside `[0, length)`.
    """

    def __init__(self, index: 'int', length: 'int') -> 'None':
        super().__init__(f"Index {index} is out of range for length {length}")
        self.index, self.length = index, length


class LengthLimitError(VectorError, OverflowError):
    """ Raised when a requested capacity exceeds what the allocator can provide.
    """

    def __init__(self, requested: 'int', limit: 'int') -> 'None':
        super().__init__(f"Requested capacity {requested} exceeds maximum {limit}")
        self.requested, self.limit = requested, limit


class AllocationError(VectorError, MemoryError):
    """ Raised by an allocator that cannot provide the requested storage.
    """


# -----------------------------------------------------------------------------
