import sys
import unittest
from pathlib import Path

_REPO_ROOT = Path(__file__).resolve().parents[2]
_PYTHON_DIR = _REPO_ROOT / "python"
for _path in (_REPO_ROOT, _PYTHON_DIR):
    path_str = str(_path)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from cmatrix import InvalidArgumentError, Matrix, MatrixIndexError


def _sample():
    return Matrix([[1, 2, 3], [4, 5, 6]])


class TestSetters(unittest.TestCase):
    def test_set_cell(self):
        m = _sample()
        m.set_cell(1, 0, 40)
        self.assertEqual(m.rows_vec(1), [40, 5, 6])

    def test_set_row(self):
        m = _sample()
        m.set_row(0, [7, 8, 9])
        self.assertEqual(m.to_vector(), [[7, 8, 9], [4, 5, 6]])

    def test_set_column(self):
        m = _sample()
        m.set_column(2, [30, 60])
        self.assertEqual(m.columns_vec(2), [30, 60])

    def test_set_diag(self):
        m = _sample()
        m.set_diag([0, 0])
        self.assertEqual(m.to_vector(), [[0, 2, 3], [4, 0, 6]])
        with self.assertRaises(InvalidArgumentError):
            m.set_diag([1, 2, 3])

    def test_index_checked_before_length(self):
        m = _sample()
        with self.assertRaises(MatrixIndexError):
            m.set_row(5, [1])
        with self.assertRaises(InvalidArgumentError):
            m.set_row(0, [1])
        with self.assertRaises(MatrixIndexError):
            m.set_column(9, [1, 2, 3])
        with self.assertRaises(InvalidArgumentError):
            m.set_column(0, [1, 2, 3])

    def test_values_follow_dtype(self):
        m = Matrix([[1.0, 2.0]])
        m.set_row(0, [3, 4])
        self.assertTrue(all(isinstance(v, float) for v in m.rows_vec(0)))


class TestInsertAndPush(unittest.TestCase):
    def test_insert_row_positions(self):
        m = _sample()
        m.insert_row(1, [7, 8, 9])
        self.assertEqual(m.to_vector(), [[1, 2, 3], [7, 8, 9], [4, 5, 6]])
        m.insert_row(3, [0, 0, 0])
        self.assertEqual(m.rows_vec(3), [0, 0, 0])

    def test_insert_row_bad_position_then_length(self):
        m = _sample()
        with self.assertRaises(MatrixIndexError):
            m.insert_row(3, [1])
        with self.assertRaises(InvalidArgumentError):
            m.insert_row(2, [1])

    def test_insert_column(self):
        m = _sample()
        m.insert_column(0, [0, 0])
        self.assertEqual(m.to_vector(), [[0, 1, 2, 3], [0, 4, 5, 6]])
        with self.assertRaises(InvalidArgumentError):
            m.insert_column(1, [1, 2, 3])
        with self.assertRaises(MatrixIndexError):
            m.insert_column(6, [1, 2])

    def test_insert_into_empty_fixes_shape(self):
        m = Matrix(dtype=int)
        m.insert_row(0, [1, 2, 3])
        self.assertEqual(m.dim(), (1, 3))

        n = Matrix(dtype=int)
        n.insert_column(0, [1, 2])
        self.assertEqual(n.to_vector(), [[1], [2]])

    def test_insert_empty_vector_into_empty_fails(self):
        with self.assertRaises(InvalidArgumentError):
            Matrix().insert_row(0, [])
        with self.assertRaises(MatrixIndexError):
            Matrix().insert_row(1, [1])

    def test_push(self):
        m = Matrix([[5]])
        m.push_row_front([1])
        m.push_row_back([9])
        self.assertEqual(m.columns_vec(0), [1, 5, 9])
        m.push_col_front([0, 0, 0])
        m.push_col_back([2, 2, 2])
        self.assertEqual(m.to_vector(), [[0, 1, 2], [0, 5, 2], [0, 9, 2]])

    def test_push_on_empty(self):
        m = Matrix(dtype=int)
        m.push_col_back([1, 2])
        self.assertEqual(m.dim(), (2, 1))
        m = Matrix(dtype=int)
        m.push_row_front([1, 2])
        self.assertEqual(m.dim(), (1, 2))


class TestRemove(unittest.TestCase):
    def test_remove_row(self):
        m = _sample()
        m.remove_row(0)
        self.assertEqual(m.to_vector(), [[4, 5, 6]])
        m.remove_row(0)
        self.assertTrue(m.is_empty())

    def test_remove_column(self):
        m = _sample()
        m.remove_column(1)
        self.assertEqual(m.to_vector(), [[1, 3], [4, 6]])

    def test_removing_last_column_empties(self):
        m = Matrix([[1], [2]])
        m.remove_column(0)
        self.assertTrue(m.is_empty())
        self.assertEqual(m.dim(), (0, 0))

    def test_remove_out_of_range(self):
        with self.assertRaises(MatrixIndexError):
            Matrix().remove_row(0)
        with self.assertRaises(MatrixIndexError):
            Matrix().remove_column(0)
        with self.assertRaises(MatrixIndexError):
            _sample().remove_row(2)


class TestFind(unittest.TestCase):
    def test_find_row_by_vector_and_predicate(self):
        m = _sample()
        self.assertEqual(m.find_row([4, 5, 6]), 1)
        self.assertEqual(m.find_row([4, 5, 7]), -1)
        self.assertEqual(m.find_row(lambda row: sum(row) > 10), 1)

    def test_find_row_wrong_length_never_matches(self):
        self.assertEqual(_sample().find_row([1, 2]), -1)

    def test_find_column(self):
        m = _sample()
        self.assertEqual(m.find_column([3, 6]), 2)
        self.assertEqual(m.find_column(lambda col: col[0] == 2), 1)
        self.assertEqual(m.find_column([3, 6, 9]), -1)

    def test_find(self):
        m = _sample()
        self.assertEqual(m.find(5), (1, 1))
        self.assertEqual(m.find(lambda v: v % 2 == 0), (0, 1))
        self.assertEqual(m.find(10), (-1, -1))

    def test_find_on_empty(self):
        m = Matrix()
        self.assertEqual(m.find_row([1]), -1)
        self.assertEqual(m.find_column(lambda col: True), -1)
        self.assertEqual(m.find(0), (-1, -1))


class TestBulkUpdates(unittest.TestCase):
    def test_fill(self):
        m = _sample()
        m.fill(0)
        self.assertTrue(m.all(0))

    def test_clear(self):
        m = _sample()
        m.clear()
        self.assertTrue(m.is_empty())
        self.assertIs(m.dtype, int)

    def test_apply_keeps_dtype(self):
        m = Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        original = m.copy()
        m.apply(lambda x: x * 2)
        self.assertEqual(m, Matrix([[2, 4, 6], [8, 10, 12], [14, 16, 18]]))
        m.apply(lambda x: x / 2)
        self.assertEqual(m, original)
        self.assertIs(m.dtype, int)

    def test_apply_indexed(self):
        m = Matrix(2, 2, 0)
        m.apply(lambda value, i, j: value + 10 * i + j, indexed=True)
        self.assertEqual(m.to_vector(), [[0, 1], [10, 11]])


if __name__ == "__main__":
    unittest.main()
