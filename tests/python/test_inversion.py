import os
import unittest
import warnings
from unittest import mock

import numpy as np

import cachematrix
from cachematrix import CacheMatrixError, CacheMatrixPrecisionWarning, InversionError, invert


class TestInvert(unittest.TestCase):
    def test_inverse_matches_numpy(self):
        np.random.seed(42)
        a = np.random.rand(20, 20) + np.eye(20) * 2.0
        inv = invert(a)
        max_diff = np.max(np.abs(inv - np.linalg.inv(a)))
        self.assertLess(max_diff, 1e-10)
        np.testing.assert_allclose(a @ inv, np.eye(20), atol=1e-10)

    def test_accepts_nested_lists(self):
        inv = invert([[2, 0], [0, 4]])
        self.assertIsInstance(inv, np.ndarray)
        np.testing.assert_allclose(inv, [[0.5, 0.0], [0.0, 0.25]])

    def test_does_not_mutate_input(self):
        a = np.array([[4.0, 7.0], [2.0, 6.0]])
        before = a.copy()
        invert(a)
        np.testing.assert_array_equal(a, before)

    def test_singular_matrix(self):
        with self.assertRaises(InversionError) as ctx:
            invert(np.zeros((3, 3)))
        err = ctx.exception
        self.assertEqual(err.reason, "singular")
        self.assertEqual(err.shape, (3, 3))
        self.assertIsInstance(err.__cause__, np.linalg.LinAlgError)

    def test_non_square_rejected_explicitly(self):
        with self.assertRaises(InversionError) as ctx:
            invert(np.ones((2, 3)))
        self.assertEqual(ctx.exception.reason, "not_square")
        self.assertEqual(ctx.exception.shape, (2, 3))

    def test_not_2d(self):
        with self.assertRaises(InversionError) as ctx:
            invert([1.0, 2.0, 3.0])
        self.assertEqual(ctx.exception.reason, "not_2d")

    def test_empty(self):
        with self.assertRaises(InversionError) as ctx:
            invert(np.empty((0, 0)))
        self.assertEqual(ctx.exception.reason, "empty")

    def test_non_numeric(self):
        with self.assertRaises(InversionError) as ctx:
            invert([["a", "b"], ["c", "d"]])
        self.assertEqual(ctx.exception.reason, "not_numeric")

    def test_ragged(self):
        with self.assertRaises(InversionError) as ctx:
            invert([[1.0, 2.0], [3.0]])
        self.assertEqual(ctx.exception.reason, "not_numeric")

    def test_complex_input_rejected_not_truncated(self):
        for a in (np.array([[1 + 1j, 0], [0, 1]]), [[1j, 0], [0, 1]]):
            with self.subTest(a=a):
                with warnings.catch_warnings():
                    warnings.simplefilter("error")
                    with self.assertRaises(InversionError) as ctx:
                        invert(a)
                self.assertEqual(ctx.exception.reason, "not_numeric")

    def test_numeric_strings_rejected(self):
        with self.assertRaises(InversionError) as ctx:
            invert([["2", "0"], ["0", "4"]])
        self.assertEqual(ctx.exception.reason, "not_numeric")

        cm = cachematrix.CachedMatrix(np.array([["2", "0"], ["0", "4"]]))
        with self.assertRaises(InversionError):
            cachematrix.cache_solve(cm)
        self.assertIs(cm.get_cached_inverse(), cachematrix.UNSET)

    def test_integer_and_bool_input_accepted(self):
        np.testing.assert_allclose(invert(np.array([[2, 0], [0, 4]], dtype=np.int64)), [[0.5, 0.0], [0.0, 0.25]])
        np.testing.assert_allclose(invert(np.array([[2, 0], [0, 4]], dtype=np.uint8)), [[0.5, 0.0], [0.0, 0.25]])
        np.testing.assert_allclose(invert(np.eye(2, dtype=bool)), np.eye(2))

    def test_missing_values(self):
        with self.assertRaises(InversionError) as ctx:
            invert(cachematrix.empty_placeholder())
        self.assertEqual(ctx.exception.reason, "non_finite")

        with self.assertRaises(InversionError):
            invert([[1.0, np.inf], [0.0, 1.0]])

    def test_error_hierarchy_and_message(self):
        with self.assertRaises(ValueError) as ctx:
            invert(np.ones((2, 3)))
        err = ctx.exception
        self.assertIsInstance(err, CacheMatrixError)
        self.assertEqual(
            str(err),
            "Matrix input must be square (rows == columns). (reason=not_square, shape=(2, 3))",
        )


class TestPrecisionWarning(unittest.TestCase):
    def setUp(self):
        cachematrix.runtime.reset()

    def tearDown(self):
        cachematrix.runtime.reset()

    def test_well_conditioned_matrix_does_not_warn(self):
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            invert([[4.0, 7.0], [2.0, 6.0]])
        self.assertFalse(any(issubclass(x.category, CacheMatrixPrecisionWarning) for x in w))

    def test_ill_conditioned_matrix_warns_but_returns(self):
        a = np.array([[1.0, 1.0], [1.0, 1.0 + 1e-14]])
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            inv = invert(a)
        self.assertTrue(np.all(np.isfinite(inv)))
        self.assertTrue(any(issubclass(x.category, CacheMatrixPrecisionWarning) for x in w))

    def test_threshold_from_environment(self):
        a = np.diag([1.0, 1e-3])
        with mock.patch.dict(os.environ, {"CACHEMATRIX_COND_WARN": "10"}):
            cachematrix.runtime.reset()
            with self.assertWarns(CacheMatrixPrecisionWarning):
                invert(a)

    def _assert_warning_points_here(self, call):
        ill = np.array([[1.0, 1.0], [1.0, 1.0 + 1e-14]])
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            call(ill)
        hits = [x for x in w if issubclass(x.category, CacheMatrixPrecisionWarning)]
        self.assertEqual(len(hits), 1)
        self.assertEqual(os.path.basename(hits[0].filename), os.path.basename(__file__))

    def test_warning_points_at_caller_of_invert(self):
        self._assert_warning_points_here(invert)

    def test_warning_points_at_caller_of_cache_solve(self):
        self._assert_warning_points_here(
            lambda a: cachematrix.cache_solve(cachematrix.CachedMatrix(a))
        )

    def test_warning_points_at_caller_of_inverse_method(self):
        self._assert_warning_points_here(lambda a: cachematrix.CachedMatrix(a).inverse())

    def test_warning_category_can_be_filtered(self):
        self.assertTrue(issubclass(CacheMatrixPrecisionWarning, cachematrix.CacheMatrixWarning))
        self.assertTrue(issubclass(CacheMatrixPrecisionWarning, UserWarning))


if __name__ == "__main__":
    unittest.main()
