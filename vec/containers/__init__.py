from vec.containers.cursor import Cursor, ReverseCursor, distance, iterate
from vec.containers.growth import GrowthPolicy
from vec.containers.vector import VectorBase, Vector
