"""
Matrix — матрица фиксированного размера с эксклюзивным владением буфером

Матрица rows×cols хранит значения IEEE-754 double в одном непрерывном
буфере array('d'), индекс ячейки row * cols + col.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. rows >= 1, cols >= 1, размерность неизменна всё время жизни
2. Буфер содержит ровно rows * cols элементов
3. Конструктор либо создаёт полностью обнулённую матрицу, либо бросает
   исключение (частично созданной матрицы не бывает)
4. Буфер никогда не разделяется между экземплярами: все методы,
   отдающие данные наружу, возвращают копии
5. Изменение возможно только поэлементно (set, set_row, set_column)

Освобождение буфера выполняет сборщик мусора, явного destroy нет.
"""

import logging
from array import array
from typing import Iterable, Iterator, Sequence

from src.core.math.numerical_safeguards import MAX_MATRIX_ELEMENTS

logger = logging.getLogger(__name__)

# Код типа array для IEEE-754 double
_TYPECODE = "d"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class MatrixError(Exception):
    """Базовая ошибка операций с матрицей."""


class InvalidDimensions(MatrixError, ValueError):
    """Размерность не является положительным целым или формы не совпадают."""


class DimensionOverflow(MatrixError, ValueError):
    """rows * cols превышает адресуемое число элементов (MAX_MATRIX_ELEMENTS)."""


class AllocationFailure(MatrixError, MemoryError):
    """Буфер матрицы не удалось выделить."""


class IndexOutOfBounds(MatrixError, IndexError):
    """Индекс ячейки вне [0, rows) × [0, cols)."""


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def _validate_dimension(value: int, name: str, rows: int, cols: int) -> None:
    # bool является подклассом int, но размерностью не является
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDimensions(
            f"{name} must be an integer, got {value!r} (requested {rows!r}x{cols!r})"
        )
    if value <= 0:
        raise InvalidDimensions(
            f"{name} must be positive, got {value} (requested {rows}x{cols})"
        )


def _allocate(rows: int, cols: int, values: Iterable[float] | None = None) -> array:
    """
    Выделение буфера rows * cols: обнулённого или из значений row-major.

    Raises:
        InvalidDimensions: Если rows или cols не положительные целые
            или число значений не равно rows * cols
        DimensionOverflow: Если rows * cols > MAX_MATRIX_ELEMENTS
        AllocationFailure: Если память не выделена
    """
    _validate_dimension(rows, "rows", rows, cols)
    _validate_dimension(cols, "cols", rows, cols)

    size = rows * cols
    if size > MAX_MATRIX_ELEMENTS:
        raise DimensionOverflow(
            f"Matrix {rows}x{cols} has {size} elements, "
            f"exceeds maximum {MAX_MATRIX_ELEMENTS}"
        )

    try:
        if values is None:
            return array(_TYPECODE, [0.0]) * size
        data = array(_TYPECODE, values)
    except MemoryError as e:
        logger.error("Failed to allocate matrix buffer %dx%d (%d elements)", rows, cols, size)
        raise AllocationFailure(
            f"Cannot allocate matrix {rows}x{cols} ({size} elements)"
        ) from e

    if len(data) != size:
        raise InvalidDimensions(
            f"Expected {size} values for {rows}x{cols} matrix, got {len(data)}"
        )

    return data

# =============================================================================
# MATRIX
# =============================================================================


class Matrix:
    """
    Матрица rows×cols значений double.

    Examples:
        >>> m = Matrix(2, 3)
        >>> m.get(1, 2)
        0.0
        >>> m.set(1, 2, 4.5)
        >>> m.get(1, 2)
        4.5
    """

    __slots__ = ("_rows", "_cols", "_data")

    def __init__(self, rows: int, cols: int):
        """
        Создание обнулённой матрицы.

        Args:
            rows: Число строк (>= 1)
            cols: Число столбцов (>= 1)

        Raises:
            InvalidDimensions: Если rows <= 0 или cols <= 0
            DimensionOverflow: Если rows * cols превышает адресуемый предел
            AllocationFailure: Если буфер не удалось выделить
        """
        self._data = _allocate(rows, cols)
        self._rows = rows
        self._cols = cols

    @classmethod
    def create(cls, rows: int, cols: int) -> "Matrix":
        """Создание обнулённой матрицы rows×cols (эквивалент Matrix(rows, cols))."""
        return cls(rows, cols)

    @classmethod
    def from_values(cls, rows: int, cols: int, values: Iterable[float]) -> "Matrix":
        """
        Создание матрицы из значений в порядке row-major.

        Raises:
            InvalidDimensions: Если число значений не равно rows * cols
        """
        matrix = cls.__new__(cls)
        matrix._data = _allocate(rows, cols, values)
        matrix._rows = rows
        matrix._cols = cols
        return matrix

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "Matrix":
        """
        Создание матрицы из вложенных последовательностей.

        Raises:
            InvalidDimensions: Если вход пустой или строки разной длины
        """
        if len(rows) == 0:
            raise InvalidDimensions("Cannot build matrix from empty row list")

        cols = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != cols:
                raise InvalidDimensions(
                    f"Row {i} has {len(row)} elements, expected {cols} (ragged input)"
                )

        return cls.from_values(len(rows), cols, (value for row in rows for value in row))

    # -------------------------------------------------------------------------
    # Размерность
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    # -------------------------------------------------------------------------
    # Доступ к ячейкам
    # -------------------------------------------------------------------------

    def _offset(self, row: int, col: int) -> int:
        for index in (row, col):
            if isinstance(index, bool) or not isinstance(index, int):
                raise IndexOutOfBounds(
                    f"Index ({row!r}, {col!r}) must be integers for matrix "
                    f"{self._rows}x{self._cols}"
                )
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise IndexOutOfBounds(
                f"Index ({row}, {col}) out of bounds for matrix "
                f"{self._rows}x{self._cols}"
            )
        return row * self._cols + col

    def get(self, row: int, col: int) -> float:
        """
        Значение ячейки (row, col).

        Raises:
            IndexOutOfBounds: Если row >= rows, col >= cols или индекс отрицательный
        """
        return self._data[self._offset(row, col)]

    def set(self, row: int, col: int, value: float) -> None:
        """
        Запись значения в одну ячейку.

        Raises:
            IndexOutOfBounds: Если индекс вне границ
        """
        self._data[self._offset(row, col)] = value

    def values(self) -> Iterator[float]:
        """Итератор по значениям в порядке row-major."""
        return iter(self._data.tolist())

    def to_rows(self) -> list[list[float]]:
        """Копия содержимого как список строк."""
        flat = self._data.tolist()
        return [flat[i * self._cols:(i + 1) * self._cols] for i in range(self._rows)]

    def copy(self) -> "Matrix":
        """Глубокая копия с собственным буфером."""
        return Matrix.from_values(self._rows, self._cols, self._data)

    # -------------------------------------------------------------------------
    # Строки и столбцы
    # -------------------------------------------------------------------------

    def row(self, index: int) -> "Matrix":
        """Копия строки index как матрица 1×cols."""
        start = self._offset(index, 0)
        return Matrix.from_values(1, self._cols, self._data[start:start + self._cols])

    def column(self, index: int) -> "Matrix":
        """Копия столбца index как матрица rows×1."""
        self._offset(0, index)
        return Matrix.from_values(self._rows, 1, self._data[index::self._cols])

    def set_row(self, index: int, source: "Matrix") -> None:
        """
        Поэлементная запись матрицы 1×cols в строку index.

        Raises:
            IndexOutOfBounds: Если index вне [0, rows)
            InvalidDimensions: Если source не 1×cols
        """
        start = self._offset(index, 0)
        if source.shape != (1, self._cols):
            raise InvalidDimensions(
                f"Row source must be 1x{self._cols}, got {source.rows}x{source.cols}"
            )
        for j in range(self._cols):
            self._data[start + j] = source._data[j]

    def set_column(self, index: int, source: "Matrix") -> None:
        """
        Поэлементная запись матрицы rows×1 в столбец index.

        Raises:
            IndexOutOfBounds: Если index вне [0, cols)
            InvalidDimensions: Если source не rows×1
        """
        self._offset(0, index)
        if source.shape != (self._rows, 1):
            raise InvalidDimensions(
                f"Column source must be {self._rows}x1, got {source.rows}x{source.cols}"
            )
        for i in range(self._rows):
            self._data[i * self._cols + index] = source._data[i]

    def __repr__(self) -> str:
        body = ", ".join(
            "[" + ", ".join(f"{v:.4g}" for v in row) + "]" for row in self.to_rows()
        )
        return f"Matrix({self._rows}x{self._cols}, [{body}])"
