"""
Elementwise Engine — поэлементное применение скалярной функции к матрице

    result[i][j] = f(input[i][j])

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Входная матрица никогда не изменяется, результат: новая матрица
   той же формы с собственным буфером
2. Каждая ячейка посещается ровно один раз (эталонный порядок row-major),
   между ячейками нет зависимостей
3. NaN/Inf, возвращённые f, не перехватываются и не подменяются:
   их обработка остаётся за вызывающим кодом

Именованные специализации (apply_sigmoid, apply_tanh_derivative, ...)
только делегируют в apply с фиксированной функцией.
"""

from src.core.math.activations import (
    ActivationKind,
    ActivationParams,
    ScalarActivation,
    ScalarUnaryFn,
    elu,
    elu_derivative,
    get_activation,
    hard_sigmoid,
    hard_sigmoid_derivative,
    leaky_relu,
    leaky_relu_derivative,
    linear,
    linear_derivative,
    relu,
    relu_derivative,
    sigmoid,
    sigmoid_derivative,
    swish,
    swish_derivative,
    tanh,
    tanh_derivative,
)
from src.core.math.numerical_safeguards import (
    ELU_ALPHA_DEFAULT,
    LEAKY_RELU_ALPHA_DEFAULT,
    clamp,
)
from src.core.matrix.matrix import Matrix


# =============================================================================
# ОСНОВНАЯ ОПЕРАЦИЯ
# =============================================================================


def apply(matrix: Matrix, fn: ScalarUnaryFn) -> Matrix:
    """
    Поэлементное применение f к матрице.

    Args:
        matrix: Входная матрица (не изменяется)
        fn: Скалярная функция double -> double

    Returns:
        Новая матрица формы matrix.shape

    Raises:
        AllocationFailure: Если буфер результата не удалось выделить

    Examples:
        >>> m = Matrix.from_rows([[0.0, 1.0]])
        >>> apply(m, lambda x: x + 1.0).to_rows()
        [[1.0, 2.0]]
    """
    return Matrix.from_values(matrix.rows, matrix.cols, (fn(v) for v in matrix.values()))


def _resolve(
    activation: ScalarActivation | ActivationKind | str,
    params: ActivationParams | None,
) -> ScalarActivation:
    if isinstance(activation, ScalarActivation):
        return activation
    return get_activation(activation, params)


def apply_activation(
    matrix: Matrix,
    activation: ScalarActivation | ActivationKind | str,
    params: ActivationParams | None = None,
) -> Matrix:
    """
    Применение forward-функции именованной активации.

    Args:
        matrix: Входная матрица
        activation: ScalarActivation, ActivationKind или имя
        params: Параметры alpha для leaky_relu/elu (если activation задан именем)

    Raises:
        ValueError: Если имя активации неизвестно
    """
    return apply(matrix, _resolve(activation, params).forward)


def apply_derivative(
    matrix: Matrix,
    activation: ScalarActivation | ActivationKind | str,
    params: ActivationParams | None = None,
) -> Matrix:
    """Применение производной именованной активации (см. apply_activation)."""
    return apply(matrix, _resolve(activation, params).derivative)


def clip(matrix: Matrix, min_value: float, max_value: float) -> Matrix:
    """
    Поэлементное ограничение значений диапазоном [min_value, max_value].

    NaN в ячейках сохраняется.

    Raises:
        ValueError: Если min_value > max_value
    """
    if min_value > max_value:
        raise ValueError(f"min_value {min_value} must be <= max_value {max_value}")
    return apply(matrix, lambda v: clamp(v, min_value, max_value))


# =============================================================================
# ИМЕНОВАННЫЕ СПЕЦИАЛИЗАЦИИ
# =============================================================================


def apply_sigmoid(matrix: Matrix) -> Matrix:
    return apply(matrix, sigmoid)


def apply_sigmoid_derivative(matrix: Matrix) -> Matrix:
    return apply(matrix, sigmoid_derivative)


def apply_tanh(matrix: Matrix) -> Matrix:
    return apply(matrix, tanh)


def apply_tanh_derivative(matrix: Matrix) -> Matrix:
    return apply(matrix, tanh_derivative)


def apply_relu(matrix: Matrix) -> Matrix:
    return apply(matrix, relu)


def apply_relu_derivative(matrix: Matrix) -> Matrix:
    return apply(matrix, relu_derivative)


def apply_leaky_relu(matrix: Matrix, alpha: float = LEAKY_RELU_ALPHA_DEFAULT) -> Matrix:
    return apply(matrix, lambda v: leaky_relu(v, alpha))


def apply_leaky_relu_derivative(
    matrix: Matrix, alpha: float = LEAKY_RELU_ALPHA_DEFAULT
) -> Matrix:
    return apply(matrix, lambda v: leaky_relu_derivative(v, alpha))


def apply_elu(matrix: Matrix, alpha: float = ELU_ALPHA_DEFAULT) -> Matrix:
    return apply(matrix, lambda v: elu(v, alpha))


def apply_elu_derivative(matrix: Matrix, alpha: float = ELU_ALPHA_DEFAULT) -> Matrix:
    return apply(matrix, lambda v: elu_derivative(v, alpha))


def apply_hard_sigmoid(matrix: Matrix) -> Matrix:
    return apply(matrix, hard_sigmoid)


def apply_hard_sigmoid_derivative(matrix: Matrix) -> Matrix:
    return apply(matrix, hard_sigmoid_derivative)


def apply_linear(matrix: Matrix) -> Matrix:
    return apply(matrix, linear)


def apply_linear_derivative(matrix: Matrix) -> Matrix:
    return apply(matrix, linear_derivative)


def apply_swish(matrix: Matrix) -> Matrix:
    return apply(matrix, swish)


def apply_swish_derivative(matrix: Matrix) -> Matrix:
    return apply(matrix, swish_derivative)
