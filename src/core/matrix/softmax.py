"""
Softmax — нормализация вектора и пакета векторов

Композиция примитивов Matrix: softmax применяется к вектору (1×N или N×1)
или к каждой строке/столбцу матрицы. Для численной устойчивости из всех
значений вычитается максимум:

    softmax(x)_i = e^(x_i - max(x)) / Σ_k e^(x_k - max(x))
"""

import math
from typing import Final

from src.core.matrix.matrix import InvalidDimensions, Matrix

# axis = 0: каждый столбец является отдельным вектором
AXIS_COLUMNS: Final[int] = 0

# axis = 1: каждая строка является отдельным вектором
AXIS_ROWS: Final[int] = 1


def softmax_vector(matrix: Matrix) -> Matrix:
    """
    Softmax вектора-строки или вектора-столбца.

    Args:
        matrix: Матрица 1×N или N×1

    Returns:
        Новая матрица той же формы, сумма значений равна 1

    Raises:
        InvalidDimensions: Если matrix не является вектором
    """
    if matrix.rows != 1 and matrix.cols != 1:
        raise InvalidDimensions(
            f"Softmax input must be a 1xN or Nx1 vector, got {matrix.rows}x{matrix.cols}"
        )

    values = list(matrix.values())
    max_value = max(values)
    exps = [math.exp(v - max_value) for v in values]
    total = sum(exps)

    return Matrix.from_values(matrix.rows, matrix.cols, (e / total for e in exps))


def softmax_batch(matrix: Matrix, axis: int) -> Matrix:
    """
    Softmax по строкам (axis=1) или по столбцам (axis=0).

    Raises:
        ValueError: Если axis не 0 и не 1
    """
    if axis not in (AXIS_COLUMNS, AXIS_ROWS):
        raise ValueError(f"axis must be {AXIS_COLUMNS} or {AXIS_ROWS}, got {axis}")

    result = Matrix(matrix.rows, matrix.cols)

    if axis == AXIS_ROWS:
        for i in range(matrix.rows):
            result.set_row(i, softmax_vector(matrix.row(i)))
    else:
        for j in range(matrix.cols):
            result.set_column(j, softmax_vector(matrix.column(j)))

    return result
