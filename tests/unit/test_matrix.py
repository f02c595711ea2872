import numpy as np
import pytest

from zisnet.core import matrix as mx
from zisnet.core.errors import (
    DimensionMismatchError,
    IndexOutOfBoundsError,
    InvalidDimensionError,
    NotSquareError,
    RaggedInputError,
    SingularMatrixError,
)
from zisnet.core.matrix import Matrix


def test_create_is_zero_filled_and_validates_dimensions():
    m = Matrix(2, 3)
    assert m.shape == (2, 3)
    assert m == Matrix.from_grid([[0, 0, 0], [0, 0, 0]])
    assert Matrix(0, 4).shape == (0, 4)
    with pytest.raises(InvalidDimensionError):
        Matrix(-1, 2)
    with pytest.raises(InvalidDimensionError):
        Matrix(2, -1)


def test_from_grid_copies_and_rejects_ragged_rows():
    grid = [[3.0, 4.0, 5.0], [1.0, 2.0, 3.0]]
    m = Matrix.from_grid(grid)
    grid[0][0] = 99.0
    assert m.get(0, 0) == 3.0
    assert m.to_array() == [[3.0, 4.0, 5.0], [1.0, 2.0, 3.0]]
    with pytest.raises(RaggedInputError):
        Matrix.from_grid([[1, 2], [3]])


def test_equality_is_exact_and_shape_aware():
    m = Matrix.from_grid([[1, 2], [3, 4]])
    m1 = Matrix(2, 2).set_row(0, [1, 2]).set_row(1, [3, 4])
    assert mx.equals(m, m1)
    assert m == m1
    assert not mx.equals(Matrix(2, 2), m1)
    assert not mx.equals(Matrix(2, 2), Matrix(3, 4))
    assert Matrix.from_grid([[1.0]]) != Matrix.from_grid([[1.0 + 1e-12]])


def test_determinant():
    assert Matrix.from_grid([[2, 3], [4, 5]]).determinant() == -2
    assert Matrix.from_grid([[1, 2, 3], [4, 5, 6], [7, 8, 9]]).determinant() == 0
    assert Matrix.from_grid([[6, 3, 4], [8, 9, 3], [7, 4, 3]]).determinant() == -43
    assert Matrix.from_grid([[7]]).determinant() == 7
    with pytest.raises(NotSquareError):
        Matrix.from_grid([[2, 3, 4], [4, 5, 6]]).determinant()


def test_determinant_matches_numpy_for_random_4x4():
    rng = np.random.default_rng(0)
    m = Matrix(4, 4).randomize(-1.0, 1.0, rng)
    assert m.determinant() == pytest.approx(np.linalg.det(m.data))


def test_products():
    a = Matrix.from_grid([[1, 2], [3, 4]])
    b = Matrix.from_grid([[3, 4], [4, 5]])

    assert mx.hadamard(a, b) == Matrix.from_grid([[3, 8], [12, 20]])
    assert mx.matmul(a, b) == Matrix.from_grid([[11, 14], [25, 32]])
    assert a == Matrix.from_grid([[1, 2], [3, 4]])

    assert a.copy().hadamard(b) == Matrix.from_grid([[3, 8], [12, 20]])
    chained = a.matmul(b)
    assert chained is a
    assert a == Matrix.from_grid([[11, 14], [25, 32]])

    m = Matrix.from_grid([[2, 4], [1, 3]])
    zeroed = mx.scale(m, 0)
    m.mult(3)
    assert m == Matrix.from_grid([[6, 12], [3, 9]])
    assert zeroed == Matrix.from_grid([[0, 0], [0, 0]])

    with pytest.raises(DimensionMismatchError):
        mx.matmul(Matrix(2, 2), Matrix(3, 3))


def test_matmul_shape():
    out = mx.matmul(Matrix(2, 3), Matrix(3, 5))
    assert out.shape == (2, 5)


def test_basic_arithmetic():
    a = Matrix(2, 2)
    b = Matrix.from_grid([[1, 2], [3, 4]])
    assert a.add(b) == b

    a = Matrix.from_grid([[2, 2], [2, 2]])
    a.add(b)
    assert a == Matrix.from_grid([[3, 4], [5, 6]])

    assert mx.add(Matrix(3, 3), Matrix.from_grid([[1, 2, 3]] * 3)) == Matrix.from_grid([[1, 2, 3]] * 3)
    assert mx.add(a, b) == mx.add(b, a)

    a = Matrix(2, 2)
    assert a.sub(b) == b.copy().mult(-1)

    a = Matrix.from_grid([[2, 2], [2, 2]])
    assert mx.sub(a, b) == Matrix.from_grid([[1, 0], [-1, -2]])
    a.sub(b)
    assert a == Matrix.from_grid([[1, 0], [-1, -2]])

    with pytest.raises(DimensionMismatchError):
        mx.add(Matrix(2, 2), Matrix(3, 3))
    with pytest.raises(DimensionMismatchError):
        Matrix(2, 2).hadamard(Matrix(2, 3))

    assert mx.scalar_sub(1, Matrix.from_grid([[1, 2], [3, 4]])) == Matrix.from_grid([[0, -1], [-2, -3]])


def test_operators_do_not_mutate():
    a = Matrix.from_grid([[1, 2], [3, 4]])
    b = Matrix.from_grid([[1, 1], [1, 1]])
    assert a + b == Matrix.from_grid([[2, 3], [4, 5]])
    assert a - b == Matrix.from_grid([[0, 1], [2, 3]])
    assert a @ b == Matrix.from_grid([[3, 3], [7, 7]])
    assert 2 * a == a * 2 == Matrix.from_grid([[2, 4], [6, 8]])
    assert a == Matrix.from_grid([[1, 2], [3, 4]])


def test_fill_and_map():
    m = Matrix(3, 4).fill(2)
    assert m == Matrix.from_grid([[2, 2, 2, 2]] * 3)

    m = Matrix(2, 2)
    m.map(lambda value, row, col: value + 2.0)
    assert m == Matrix.from_grid([[2, 2], [2, 2]])

    m = Matrix(3, 3).map(lambda value, row, col: row + col + 2)
    assert m.to_array() == [[2, 3, 4], [3, 4, 5], [4, 5, 6]]


def test_randomize_range_and_seeding():
    m = Matrix(20, 20).randomize(-0.5, 0.5, np.random.default_rng(3))
    assert m.data.min() >= -0.5
    assert m.data.max() < 0.5
    again = Matrix(20, 20).randomize(-0.5, 0.5, np.random.default_rng(3))
    assert m == again

    unit = Matrix(5, 5).randomize()
    assert 0.0 <= unit.data.min() and unit.data.max() < 1.0


def test_inverse():
    m = Matrix.from_grid([[1, 2], [3, 4]])
    inv = mx.inverse(m)
    assert inv == Matrix.from_grid([[-2, 1], [1.5, -0.5]])
    assert m == Matrix.from_grid([[1, 2], [3, 4]])

    m = Matrix.from_grid([[2, -1, 0], [1, 2, -2], [0, -1, 1]])
    target = Matrix.from_grid([[0, 1, 2], [-1, 2, 4], [-1, 2, 5]])
    assert mx.inverse(m) == target
    assert m == Matrix.from_grid([[2, -1, 0], [1, 2, -2], [0, -1, 1]])

    assert m.inverse() is m
    assert m == target

    assert Matrix.from_grid([[4]]).inverse() == Matrix.from_grid([[0.25]])

    with pytest.raises(SingularMatrixError):
        Matrix(2, 2).map(lambda value, row, col: value + 1).inverse()
    with pytest.raises(NotSquareError):
        mx.inverse(Matrix(2, 3))


def test_inverse_of_inverse_is_close_to_original():
    m = Matrix.from_grid([[4, 7, 2], [3, 6, 1], [2, 5, 3]])
    twice = mx.inverse(mx.inverse(m))
    assert np.allclose(twice.data, m.data)


def test_transpose():
    m = Matrix.from_grid([[1, 2], [3, 4], [5, 6]])
    target = Matrix.from_grid([[1, 3, 5], [2, 4, 6]])
    assert mx.transpose(m) == target
    assert m == Matrix.from_grid([[1, 2], [3, 4], [5, 6]])
    assert mx.transpose(mx.transpose(m)) == m

    assert m.transpose() is m
    assert m == target


def test_accessors_are_bounds_checked():
    m = Matrix.from_grid([[1, 2], [3, 4]])
    m.set(0, 0, 5)
    assert m.get(0, 0) == 5
    m.set(1, 1, 6)
    assert m.get(1, 1) == 6
    for row, col in [(2, 0), (0, 2), (-1, 0), (0, -1)]:
        with pytest.raises(IndexOutOfBoundsError):
            m.get(row, col)
        with pytest.raises(IndexOutOfBoundsError):
            m.set(row, col, 1.0)
    with pytest.raises(IndexError):
        m.get(5, 5)


def test_set_row_and_column():
    m = Matrix.from_grid([[1, 2], [3, 4]])
    m.set_column(0, [5, 6])
    assert m == Matrix.from_grid([[5, 2], [6, 4]])
    m.set_column(1, [7, 8])
    assert m == Matrix.from_grid([[5, 7], [6, 8]])
    with pytest.raises(IndexOutOfBoundsError):
        m.set_column(2, [1, 2])
    with pytest.raises(DimensionMismatchError):
        m.set_row(0, [1, 2, 3])


def test_data_is_live_and_copies_are_deep():
    m = Matrix.from_grid([[1, 2], [3, 4]])
    m.data[0, 0] = 10
    assert m.get(0, 0) == 10

    clone = m.copy()
    assert clone == m
    clone.set(1, 1, -1)
    assert m.get(1, 1) == 4

    exported = m.to_array()
    exported[0][1] = 100
    assert m.get(0, 1) == 2


def test_minor():
    m = Matrix.from_grid([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    assert m.minor(0, 1) == Matrix.from_grid([[4, 6], [7, 9]])
    assert m.minor(2, 2) == Matrix.from_grid([[1, 2], [4, 5]])


def test_str_renders_rows_between_rules():
    text = str(Matrix.from_grid([[1, 2], [3, 4]]))
    lines = text.splitlines()
    assert lines[0] == lines[-1] == "-" * 49
    assert lines[1] == "1.0\t2.0"


@pytest.mark.parametrize("rows, cols", [(2.7, 3), (2, 0.5)])
def test_non_integral_dimensions_are_rejected(rows, cols):
    with pytest.raises(InvalidDimensionError):
        Matrix(rows, cols)
    assert Matrix(2.0, 3).shape == (2, 3)
