"""
Core math modules

Скалярные активации, численные примитивы и проверка производных.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Constants
    DEFAULT_DIFF_STEP,
    DEFAULT_DIFF_TOLERANCE,
    DEFAULT_SAMPLE_POINTS,
    ELU_ALPHA_DEFAULT,
    LEAKY_RELU_ALPHA_DEFAULT,
    MAX_MATRIX_ELEMENTS,
    # Utilities
    clamp,
    is_valid_float,
    # Validation
    validate_non_negative,
    validate_positive,
)

# Activations
from src.core.math.activations import (
    ActivationKind,
    ActivationParams,
    ScalarActivation,
    elu,
    elu_derivative,
    get_activation,
    hard_sigmoid,
    hard_sigmoid_derivative,
    leaky_relu,
    leaky_relu_derivative,
    linear,
    linear_derivative,
    list_activations,
    relu,
    relu_derivative,
    sigmoid,
    sigmoid_derivative,
    swish,
    swish_derivative,
    tanh,
    tanh_derivative,
    tanh_manual,
)

# Numeric Differentiation
from src.core.math.differentiation import (
    DerivativeCheckConfig,
    DerivativeCheckResult,
    VerificationReport,
    central_difference,
    check_derivative,
    verify_activation,
)

__all__ = [
    # Numerical Safeguards — Constants
    "DEFAULT_DIFF_STEP",
    "DEFAULT_DIFF_TOLERANCE",
    "DEFAULT_SAMPLE_POINTS",
    "ELU_ALPHA_DEFAULT",
    "LEAKY_RELU_ALPHA_DEFAULT",
    "MAX_MATRIX_ELEMENTS",
    # Numerical Safeguards — Utilities
    "clamp",
    "is_valid_float",
    # Numerical Safeguards — Validation
    "validate_non_negative",
    "validate_positive",
    # Activations — Types
    "ActivationKind",
    "ActivationParams",
    "ScalarActivation",
    # Activations — Functions
    "elu",
    "elu_derivative",
    "get_activation",
    "hard_sigmoid",
    "hard_sigmoid_derivative",
    "leaky_relu",
    "leaky_relu_derivative",
    "linear",
    "linear_derivative",
    "list_activations",
    "relu",
    "relu_derivative",
    "sigmoid",
    "sigmoid_derivative",
    "swish",
    "swish_derivative",
    "tanh",
    "tanh_derivative",
    "tanh_manual",
    # Numeric Differentiation — Types
    "DerivativeCheckConfig",
    "DerivativeCheckResult",
    "VerificationReport",
    # Numeric Differentiation — Functions
    "central_difference",
    "check_derivative",
    "verify_activation",
]
