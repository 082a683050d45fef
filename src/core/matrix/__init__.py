"""Matrix — матрица с эксклюзивным владением буфером и поэлементные преобразования."""

from .elementwise import (
    apply,
    apply_activation,
    apply_derivative,
    apply_elu,
    apply_elu_derivative,
    apply_hard_sigmoid,
    apply_hard_sigmoid_derivative,
    apply_leaky_relu,
    apply_leaky_relu_derivative,
    apply_linear,
    apply_linear_derivative,
    apply_relu,
    apply_relu_derivative,
    apply_sigmoid,
    apply_sigmoid_derivative,
    apply_swish,
    apply_swish_derivative,
    apply_tanh,
    apply_tanh_derivative,
    clip,
)
from .matrix import (
    AllocationFailure,
    DimensionOverflow,
    IndexOutOfBounds,
    InvalidDimensions,
    Matrix,
    MatrixError,
)
from .softmax import softmax_batch, softmax_vector

__all__ = [
    # Matrix
    "Matrix",
    # Exceptions
    "MatrixError",
    "InvalidDimensions",
    "DimensionOverflow",
    "AllocationFailure",
    "IndexOutOfBounds",
    # Elementwise Engine
    "apply",
    "apply_activation",
    "apply_derivative",
    "apply_sigmoid",
    "apply_sigmoid_derivative",
    "apply_tanh",
    "apply_tanh_derivative",
    "apply_relu",
    "apply_relu_derivative",
    "apply_leaky_relu",
    "apply_leaky_relu_derivative",
    "apply_elu",
    "apply_elu_derivative",
    "apply_hard_sigmoid",
    "apply_hard_sigmoid_derivative",
    "apply_linear",
    "apply_linear_derivative",
    "apply_swish",
    "apply_swish_derivative",
    "clip",
    # Softmax
    "softmax_vector",
    "softmax_batch",
]
