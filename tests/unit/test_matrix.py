"""
Тесты для Matrix

Проверяемые инварианты:
1. Конструктор: обнулённая матрица или исключение (InvalidDimensions,
   DimensionOverflow, AllocationFailure)
2. get/set: проверка границ с IndexOutOfBounds
3. Отсутствие алиасинга буфера между экземплярами
4. Извлечение и вставка строк/столбцов
"""

from array import array

import pytest

from src.core.math.numerical_safeguards import MAX_MATRIX_ELEMENTS
from src.core.matrix import matrix as matrix_module
from src.core.matrix.matrix import (
    AllocationFailure,
    DimensionOverflow,
    IndexOutOfBounds,
    InvalidDimensions,
    Matrix,
    MatrixError,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def sample_matrix():
    """Матрица 2×3 из эталонного сценария."""
    return Matrix.from_rows([[-2.0, -1.0, 0.0], [1.0, 2.0, 3.0]])


# =============================================================================
# ТЕСТЫ: Создание
# =============================================================================


class TestMatrixCreate:
    """Тесты конструктора и фабрик."""

    @pytest.mark.parametrize("rows,cols", [(1, 1), (2, 3), (5, 1), (1, 7), (4, 4)])
    def test_zero_initialized(self, rows, cols):
        m = Matrix.create(rows, cols)

        assert m.rows == rows
        assert m.cols == cols
        assert m.shape == (rows, cols)
        for i in range(rows):
            for j in range(cols):
                assert m.get(i, j) == 0.0

    @pytest.mark.parametrize("rows,cols", [(0, 3), (3, 0), (-1, 3), (3, -1), (0, 0)])
    def test_non_positive_dimensions_rejected(self, rows, cols):
        with pytest.raises(InvalidDimensions, match="must be positive"):
            Matrix(rows, cols)

    @pytest.mark.parametrize("rows,cols", [(2.0, 3), (2, "3"), (True, 3), (None, 1)])
    def test_non_integer_dimensions_rejected(self, rows, cols):
        with pytest.raises(InvalidDimensions, match="must be an integer"):
            Matrix(rows, cols)

    def test_error_message_contains_requested_dimensions(self):
        with pytest.raises(InvalidDimensions, match=r"requested 0x5"):
            Matrix.create(0, 5)

    def test_overflow_rejected(self):
        with pytest.raises(DimensionOverflow, match="exceeds maximum"):
            Matrix(MAX_MATRIX_ELEMENTS, 2)

    def test_allocation_failure_wrapped(self, monkeypatch):
        """MemoryError при выделении буфера → AllocationFailure."""

        def failing_array(typecode, initializer=()):
            raise MemoryError

        monkeypatch.setattr(matrix_module, "array", failing_array)

        with pytest.raises(AllocationFailure, match="Cannot allocate matrix 3x4") as exc_info:
            Matrix(3, 4)
        assert isinstance(exc_info.value.__cause__, MemoryError)

    def test_error_hierarchy(self):
        assert issubclass(InvalidDimensions, MatrixError)
        assert issubclass(InvalidDimensions, ValueError)
        assert issubclass(DimensionOverflow, ValueError)
        assert issubclass(AllocationFailure, MemoryError)
        assert issubclass(IndexOutOfBounds, IndexError)

    def test_from_rows(self, sample_matrix):
        assert sample_matrix.shape == (2, 3)
        assert sample_matrix.get(0, 0) == -2.0
        assert sample_matrix.get(1, 2) == 3.0
        assert sample_matrix.to_rows() == [[-2.0, -1.0, 0.0], [1.0, 2.0, 3.0]]

    def test_from_rows_ragged_rejected(self):
        with pytest.raises(InvalidDimensions, match="ragged"):
            Matrix.from_rows([[1.0, 2.0], [3.0]])

    def test_from_rows_empty_rejected(self):
        with pytest.raises(InvalidDimensions):
            Matrix.from_rows([])
        with pytest.raises(InvalidDimensions):
            Matrix.from_rows([[]])

    def test_from_values_count_mismatch(self):
        with pytest.raises(InvalidDimensions, match="Expected 6 values"):
            Matrix.from_values(2, 3, [1.0, 2.0])

    def test_from_values_row_major(self):
        m = Matrix.from_values(2, 2, iter([1.0, 2.0, 3.0, 4.0]))
        assert m.get(0, 1) == 2.0
        assert m.get(1, 0) == 3.0


# =============================================================================
# ТЕСТЫ: get / set
# =============================================================================


class TestMatrixAccess:
    """Тесты доступа к ячейкам."""

    def test_set_changes_single_cell(self):
        m = Matrix(3, 3)
        m.set(1, 2, 7.5)

        assert m.get(1, 2) == 7.5
        assert sum(1 for v in m.values() if v != 0.0) == 1

    def test_set_accepts_non_finite(self):
        m = Matrix(1, 2)
        m.set(0, 0, float("inf"))
        assert m.get(0, 0) == float("inf")

    @pytest.mark.parametrize("row,col", [(2, 0), (0, 3), (2, 3), (-1, 0), (0, -1), (100, 100)])
    def test_get_out_of_bounds(self, sample_matrix, row, col):
        with pytest.raises(IndexOutOfBounds, match=rf"\({row}, {col}\) out of bounds .* 2x3"):
            sample_matrix.get(row, col)

    @pytest.mark.parametrize("row,col", [(2, 0), (0, 3), (-1, -1)])
    def test_set_out_of_bounds(self, sample_matrix, row, col):
        before = sample_matrix.to_rows()
        with pytest.raises(IndexOutOfBounds):
            sample_matrix.set(row, col, 1.0)
        assert sample_matrix.to_rows() == before

    @pytest.mark.parametrize("row,col", [(0.5, 0), (0, 1.0), ("0", 0), (None, 0)])
    def test_get_non_integer_index_rejected(self, sample_matrix, row, col):
        with pytest.raises(IndexOutOfBounds, match="must be integers for matrix 2x3"):
            sample_matrix.get(row, col)

    def test_set_bool_index_rejected(self, sample_matrix):
        """bool не принимается как индекс, как и как размерность."""
        before = sample_matrix.to_rows()
        with pytest.raises(IndexOutOfBounds, match=r"\(True, 0\) must be integers"):
            sample_matrix.set(True, 0, 9.0)
        assert sample_matrix.to_rows() == before

    def test_row_non_integer_index_rejected(self, sample_matrix):
        with pytest.raises(IndexOutOfBounds):
            sample_matrix.row(1.0)


# =============================================================================
# ТЕСТЫ: Владение буфером
# =============================================================================


class TestMatrixOwnership:
    """Буфер никогда не разделяется между экземплярами."""

    def test_copy_is_independent(self, sample_matrix):
        clone = sample_matrix.copy()
        clone.set(0, 0, 99.0)

        assert sample_matrix.get(0, 0) == -2.0
        assert clone.get(0, 0) == 99.0

    def test_to_rows_returns_copy(self, sample_matrix):
        rows = sample_matrix.to_rows()
        rows[0][0] = 99.0
        assert sample_matrix.get(0, 0) == -2.0

    def test_from_values_does_not_alias_source(self):
        source = array("d", [1.0, 2.0])
        m = Matrix.from_values(1, 2, source)
        source[0] = 99.0
        assert m.get(0, 0) == 1.0

    def test_from_rows_does_not_alias_source(self):
        nested = [[1.0, 2.0]]
        m = Matrix.from_rows(nested)
        nested[0][0] = 99.0
        assert m.get(0, 0) == 1.0


# =============================================================================
# ТЕСТЫ: Строки и столбцы
# =============================================================================


class TestMatrixRowsColumns:
    """Тесты row/column/set_row/set_column."""

    def test_row_extract(self, sample_matrix):
        row = sample_matrix.row(1)
        assert row.shape == (1, 3)
        assert row.to_rows() == [[1.0, 2.0, 3.0]]

    def test_column_extract(self, sample_matrix):
        col = sample_matrix.column(2)
        assert col.shape == (2, 1)
        assert col.to_rows() == [[0.0], [3.0]]

    def test_extracted_row_is_copy(self, sample_matrix):
        row = sample_matrix.row(0)
        row.set(0, 0, 99.0)
        assert sample_matrix.get(0, 0) == -2.0

    def test_set_row(self, sample_matrix):
        sample_matrix.set_row(0, Matrix.from_rows([[7.0, 8.0, 9.0]]))
        assert sample_matrix.to_rows() == [[7.0, 8.0, 9.0], [1.0, 2.0, 3.0]]

    def test_set_column(self, sample_matrix):
        sample_matrix.set_column(1, Matrix.from_rows([[5.0], [6.0]]))
        assert sample_matrix.to_rows() == [[-2.0, 5.0, 0.0], [1.0, 6.0, 3.0]]

    def test_set_row_shape_mismatch(self, sample_matrix):
        with pytest.raises(InvalidDimensions, match="Row source must be 1x3"):
            sample_matrix.set_row(0, Matrix(1, 2))

    def test_set_column_shape_mismatch(self, sample_matrix):
        with pytest.raises(InvalidDimensions, match="Column source must be 2x1"):
            sample_matrix.set_column(0, Matrix(3, 1))

    def test_row_index_out_of_bounds(self, sample_matrix):
        with pytest.raises(IndexOutOfBounds):
            sample_matrix.row(2)
        with pytest.raises(IndexOutOfBounds):
            sample_matrix.column(3)

    def test_repr(self, sample_matrix):
        assert repr(sample_matrix) == "Matrix(2x3, [[-2, -1, 0], [1, 2, 3]])"
