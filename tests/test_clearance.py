"""Unit tests for dossier.services.clearance: dominance partial order and strict dominance."""

import itertools
import unittest
from types import SimpleNamespace

from dossier.schemas.clearance import ZERO_LEVELS, ClearanceLevels
from dossier.services.clearance import dominates, levels_of, strictly_dominates


def _lv(security: int = 0, medical: int = 0, admin: int = 0) -> ClearanceLevels:
    return ClearanceLevels(security=security, medical=medical, admin=admin)


SAMPLE = [
    _lv(),
    _lv(1),
    _lv(2),
    _lv(0, 2),
    _lv(2, 2),
    _lv(1, 1, 1),
    _lv(3, 0, 1),
]


class TestDominancePartialOrder(unittest.TestCase):
    """dominates is reflexive, antisymmetric and transitive over a sample of vectors."""

    def test_reflexive(self) -> None:
        for a in SAMPLE:
            self.assertTrue(dominates(a, a))

    def test_antisymmetric(self) -> None:
        for a, b in itertools.product(SAMPLE, repeat=2):
            if dominates(a, b) and dominates(b, a):
                self.assertEqual(a, b)

    def test_transitive(self) -> None:
        for a, b, c in itertools.product(SAMPLE, repeat=3):
            if dominates(a, b) and dominates(b, c):
                self.assertTrue(dominates(a, c))

    def test_every_vector_dominates_zero(self) -> None:
        for a in SAMPLE:
            self.assertTrue(dominates(a, ZERO_LEVELS))

    def test_incomparable_pair(self) -> None:
        a, b = _lv(2, 0), _lv(0, 2)
        self.assertFalse(dominates(a, b))
        self.assertFalse(dominates(b, a))


class TestStrictDominance(unittest.TestCase):
    def test_equal_vectors_are_not_strict(self) -> None:
        for a in SAMPLE:
            self.assertFalse(strictly_dominates(a, a))

    def test_higher_on_one_axis_is_strict(self) -> None:
        self.assertTrue(strictly_dominates(_lv(2), _lv(1)))
        self.assertTrue(strictly_dominates(_lv(2, 2), _lv(2, 0)))

    def test_incomparable_is_not_strict(self) -> None:
        self.assertFalse(strictly_dominates(_lv(2, 0), _lv(0, 2)))
        self.assertFalse(strictly_dominates(_lv(0, 2), _lv(2, 0)))

    def test_strict_is_dominance_without_equality(self) -> None:
        for a, b in itertools.product(SAMPLE, repeat=2):
            self.assertEqual(strictly_dominates(a, b), dominates(a, b) and a != b)


class TestLevelsOf(unittest.TestCase):
    """levels_of reads the flat *_level attributes of any record."""

    def test_none_is_zero_vector(self) -> None:
        self.assertEqual(levels_of(None), ZERO_LEVELS)

    def test_levels_pass_through(self) -> None:
        levels = _lv(1, 2, 3)
        self.assertIs(levels_of(levels), levels)

    def test_reads_attributes_and_treats_null_as_zero(self) -> None:
        row = SimpleNamespace(security_level=3, medical_level=None, admin_level=1)
        self.assertEqual(levels_of(row), _lv(3, 0, 1))

    def test_missing_attributes_are_zero(self) -> None:
        self.assertEqual(levels_of(SimpleNamespace(security_level=2)), _lv(2))


if __name__ == "__main__":
    unittest.main()
