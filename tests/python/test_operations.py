import unittest
import warnings
from fractions import Fraction

import matx


def _add_sub_fixture():
    a = matx.matrix([
        [1.0] * 5,
        [2.0, 2.0, 3.0, 2.0, 2.0],
        [3.0] * 5,
        [4.0] * 5,
        [5.0] * 5,
    ])
    b = matx.matrix([[float(i)] * 5 for i in range(1, 6)])
    return a, b


class TestElementwise(unittest.TestCase):
    def test_scalar_add_sub(self):
        a = matx.matrix([[1, 2, 3], [4, 5, 6]])
        self.assertEqual((a + 1).tolist(), [[2, 3, 4], [5, 6, 7]])
        self.assertEqual((a - 1).tolist(), [[0, 1, 2], [3, 4, 5]])
        self.assertEqual(a.tolist(), [[1, 2, 3], [4, 5, 6]])

    def test_matrix_add(self):
        a, b = _add_sub_fixture()
        c = a + b
        self.assertEqual(c.tolist()[0], [2.0] * 5)
        self.assertEqual(c.tolist()[1], [4.0, 4.0, 5.0, 4.0, 4.0])
        self.assertEqual(c.tolist()[4], [10.0] * 5)

    def test_matrix_sub(self):
        a, b = _add_sub_fixture()
        c = a - b
        self.assertEqual(c.tolist()[1], [0.0, 0.0, 1.0, 0.0, 0.0])
        self.assertEqual(c.sum(), 1.0)

    def test_shape_mismatch(self):
        a = matx.matrix([[1, 2, 3]])
        b = matx.matrix([[1, 2]])
        with self.assertRaises(matx.ShapeError) as ctx:
            a + b
        self.assertEqual(ctx.exception.left, (1, 3))
        self.assertEqual(ctx.exception.right, (1, 2))
        with self.assertRaises(matx.ShapeError):
            a - b
        # ShapeError is also a ValueError
        with self.assertRaises(ValueError):
            a + b

    def test_reflected_scalar(self):
        a = matx.matrix([[1, 2], [3, 4]])
        self.assertEqual((10 + a).tolist(), [[11, 12], [13, 14]])
        self.assertEqual((10 - a).tolist(), [[9, 8], [7, 6]])
        self.assertEqual((2 * a).tolist(), [[2, 4], [6, 8]])
        self.assertEqual((12 / a).tolist(), [[12.0, 6.0], [4.0, 3.0]])

    def test_scalar_mul_div(self):
        a = matx.matrix([[2, 4], [6, 8]])
        self.assertEqual((a * 3).tolist(), [[6, 12], [18, 24]])
        self.assertEqual((a / 2).tolist(), [[1.0, 2.0], [3.0, 4.0]])

    def test_negation(self):
        a = matx.matrix([[1, -2], [0, 4]])
        self.assertEqual((-a).tolist(), [[-1, 2], [0, -4]])
        self.assertEqual(a.get(0, 1), -2)

    def test_power_uses_scalar_as_base(self):
        a = matx.matrix([[0, 1], [2, 3]])
        self.assertEqual((a ** 2).tolist(), [[1, 2], [4, 8]])
        self.assertEqual((a ** 10).tolist(), [[1, 10], [100, 1000]])

    def test_fractions(self):
        a = matx.matrix([[Fraction(1, 2), Fraction(1, 3)]])
        self.assertEqual((a + Fraction(1, 6)).tolist(), [[Fraction(2, 3), Fraction(1, 2)]])

    def test_result_is_new_matrix(self):
        a = matx.matrix([[1, 2]])
        b = a + 0
        self.assertIsNot(a, b)
        b.set(100, 0, 0)
        self.assertEqual(a.get(0, 0), 1)


class TestProduct(unittest.TestCase):
    def test_product(self):
        a = matx.matrix([[1, 2, 3], [4, 5, 6]])
        b = matx.matrix([[7, 8], [9, 10], [11, 12]])
        expected = [[58, 64], [139, 154]]
        self.assertEqual((a * b).tolist(), expected)
        self.assertEqual((a @ b).tolist(), expected)
        self.assertEqual(matx.matmul(a, b).tolist(), expected)
        self.assertEqual((a @ b).shape, (2, 2))

    def test_product_inner_mismatch(self):
        a = matx.matrix([[1, 2, 3], [4, 5, 6]])
        with self.assertRaises(matx.ShapeError):
            a @ a
        with self.assertRaises(matx.ShapeError):
            a * a

    def test_product_shape(self):
        a = matx.matrix([[1, 2, 3]])
        b = matx.matrix([[1], [2], [3]])
        self.assertEqual((a @ b).tolist(), [[14]])
        self.assertEqual((b @ a).tolist(), [[1, 2, 3], [2, 4, 6], [3, 6, 9]])

    def test_empty_inner_dimension(self):
        a = matx.Matrix(2, 0)
        b = matx.Matrix(0, 3)
        self.assertEqual((a @ b).tolist(), [[0, 0, 0], [0, 0, 0]])

    def test_operands_unchanged(self):
        a = matx.matrix([[1, 2], [3, 4]])
        b = matx.matrix([[5, 6], [7, 8]])
        a @ b
        self.assertEqual(a.tolist(), [[1, 2], [3, 4]])
        self.assertEqual(b.tolist(), [[5, 6], [7, 8]])

    def test_matmul_with_scalar_is_unsupported(self):
        a = matx.matrix([[1, 2]])
        with self.assertRaises(TypeError):
            a @ 2


class TestDivision(unittest.TestCase):
    def test_division_is_product_shaped(self):
        a = matx.matrix([[1, 2], [3, 4]])
        b = matx.matrix([[1, 2], [4, 8]])
        # cell (i, j) = sum_k a[i, k] / b[k, j]
        expected = [
            [1 / 1 + 2 / 4, 1 / 2 + 2 / 8],
            [3 / 1 + 4 / 4, 3 / 2 + 4 / 8],
        ]
        self.assertEqual((a / b).tolist(), expected)
        self.assertEqual(matx.divide(a, b).tolist(), expected)

    def test_division_shape(self):
        a = matx.matrix([[2, 4, 6]])
        b = matx.matrix([[1], [2], [3]])
        self.assertEqual((a / b).tolist(), [[6.0]])

    def test_division_inner_mismatch(self):
        a = matx.matrix([[1, 2, 3]])
        with self.assertRaises(matx.ShapeError):
            a / a

    def test_division_by_zero_cell(self):
        a = matx.matrix([[1]])
        b = matx.matrix([[0]])
        with self.assertRaises(ZeroDivisionError):
            a / b


class TestNestedMatrices(unittest.TestCase):
    def test_matrix_of_matrices_add(self):
        inner = matx.matrix([[1, 2], [3, 4]])
        outer = matx.matrix([[inner, inner]])
        total = outer + outer
        self.assertEqual(total.get(0, 1).tolist(), [[2, 4], [6, 8]])

    def test_sum_of_nested(self):
        inner = matx.matrix([[1, 1]])
        outer = matx.matrix([[inner], [inner], [inner]])
        self.assertEqual(outer.sum().tolist(), [[3, 3]])


class TestSlowOpsWarning(unittest.TestCase):
    def tearDown(self):
        matx.configure(slow_ops_threshold=50_000_000)

    def test_large_product_warns(self):
        matx.configure(slow_ops_threshold=1)
        a = matx.matrix([[1, 2], [3, 4]])
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            a @ a
        self.assertTrue(any(issubclass(w.category, matx.MatxPerformanceWarning) for w in caught))

    def test_warning_points_at_caller(self):
        matx.configure(slow_ops_threshold=1)
        a = matx.matrix([[1, 2], [3, 4]])
        fixed = matx.FixedMatrix[2, 2].from_matrix(a)
        calls = [
            lambda: a @ a,
            lambda: a * a,
            lambda: a / a,
            lambda: matx.matmul(a, a),
            lambda: matx.divide(a, a),
            lambda: fixed @ fixed,
        ]
        for call in calls:
            with warnings.catch_warnings(record=True) as caught:
                warnings.simplefilter("always")
                call()
            perf = [w for w in caught if issubclass(w.category, matx.MatxPerformanceWarning)]
            self.assertEqual(len(perf), 1)
            self.assertEqual(perf[0].filename, __file__)

    def test_disabled_threshold(self):
        matx.configure(slow_ops_threshold=0)
        a = matx.matrix([[1, 2], [3, 4]])
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            a @ a
            a / a
        self.assertFalse(any(issubclass(w.category, matx.MatxPerformanceWarning) for w in caught))

    def test_negative_threshold_rejected(self):
        with self.assertRaises(ValueError):
            matx.configure(slow_ops_threshold=-1)


if __name__ == "__main__":
    unittest.main()
