from unittest import TestCase

from vec.containers import GrowthPolicy
from vec.memory import LengthLimitError


# -----------------------------------------------------------------------------


class TestGrowthPolicy(TestCase):
    def test_doubling(self):
        g = GrowthPolicy()
        self.assertEqual(2, g.factor)
        self.assertEqual(2, g.next_capacity(0, 100))
        self.assertEqual(6, g.next_capacity(2, 100))
        self.assertEqual(22, g.next_capacity(10, 100))

    def test_fractional_factor_rounds_up(self):
        g = GrowthPolicy(1.5)
        self.assertEqual(2, g.next_capacity(0, 100))
        self.assertEqual(3, g.next_capacity(1, 100))
        self.assertEqual(15, g.next_capacity(9, 100))

    def test_clamped_to_limit(self):
        g = GrowthPolicy()
        self.assertEqual(10, g.next_capacity(7, 10))
        self.assertEqual(10, g.next_capacity(9, 10))

    def test_limit_reached(self):
        with self.assertRaises(LengthLimitError) as cm:
            GrowthPolicy().next_capacity(10, 10)
        self.assertEqual(11, cm.exception.requested)
        self.assertEqual(10, cm.exception.limit)

    def test_factor_must_exceed_one(self):
        with self.assertRaises(ValueError):
            GrowthPolicy(1)
        with self.assertRaises(ValueError):
            GrowthPolicy(0.5)


# -----------------------------------------------------------------------------
