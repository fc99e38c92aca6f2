"""
Package-wide defaults.

Containers take their allocator and growth policy by injection; these
constants are what they fall back to when nothing is injected.

Exports:
    DEFAULT_GROWTH_FACTOR (int): Capacity multiplier used when a vector
        needs at least one more slot.
    DEFAULT_MAX_SIZE (int): Largest element count the default allocator
        will hand out.
"""
import sys


DEFAULT_GROWTH_FACTOR: int = 2

# Element limit of an allocator addressing 8-byte slots in a signed address space.
DEFAULT_MAX_SIZE: int = sys.maxsize // 8
