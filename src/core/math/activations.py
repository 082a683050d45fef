"""
Activations — скалярные функции активации и их производные

Модуль содержит чистые функции f(x) и f'(x) для:
- sigmoid, tanh, relu, leaky_relu, elu, hard_sigmoid, linear, swish
- закрытый набор именованных вариантов (ActivationKind) и реестр пар
  (forward, derivative) для передачи в ElementwiseEngine

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Функции не имеют состояния и не аллоцируют (реентерабельны)
2. NaN на входе → NaN на выходе (никогда не подменяется)
3. ±Inf на входе → асимптотическая граница функции (насыщение)
4. Производные переиспользуют forward-значение алгебраически,
   экспоненты повторно не вычисляются

ФОРМУЛЫ:
    sigmoid(x)       = 1 / (1 + e^(-x))        x >= 0
                     = e^x / (1 + e^x)         x < 0  (без переполнения e^(-x))
    sigmoid'(x)      = s * (1 - s)
    tanh'(x)         = 1 - tanh(x)^2
    elu'(x)          = elu(x, α) + α           x <= 0
    swish'(x)        = s + x * s * (1 - s)
"""

import math
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Callable

from pydantic import BaseModel, Field

from src.core.math.numerical_safeguards import (
    ELU_ALPHA_DEFAULT,
    HARD_SIGMOID_BOUND,
    HARD_SIGMOID_SLOPE,
    LEAKY_RELU_ALPHA_DEFAULT,
    clamp,
)

ScalarUnaryFn = Callable[[float], float]

# Порог, за которым tanh_manual возвращает ±1.0: tanh(20) округляется до 1.0
# в double, а e^x переполняется уже при x > 709
TANH_SATURATION_THRESHOLD = 20.0


# =============================================================================
# SIGMOID
# =============================================================================


def sigmoid(x: float) -> float:
    """
    Численно устойчивый sigmoid.

    Для x >= 0 используется 1 / (1 + e^(-x)), для x < 0 алгебраически
    эквивалентная форма e^x / (1 + e^x): e^(-x) при больших отрицательных x
    переполнился бы.

    Args:
        x: Входное значение

    Returns:
        Значение в (0, 1); sigmoid(+inf) = 1, sigmoid(-inf) = 0

    Examples:
        >>> sigmoid(0.0)
        0.5
        >>> sigmoid(-1000.0)
        0.0
    """
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))

    # x < 0 или NaN: NaN проходит через exp без изменений
    exp_x = math.exp(x)
    return exp_x / (1.0 + exp_x)


def sigmoid_derivative(x: float) -> float:
    """
    Производная sigmoid: s * (1 - s), где s = sigmoid(x).

    Returns:
        Значение в (0, 0.25], максимум 0.25 при x = 0
    """
    s = sigmoid(x)
    return s * (1.0 - s)


# =============================================================================
# TANH
# =============================================================================


def tanh(x: float) -> float:
    """Гиперболический тангенс платформы (math.tanh), нечётная функция в (-1, 1)."""
    return math.tanh(x)


def tanh_manual(x: float) -> float:
    """
    Альтернативная форма через две экспоненты: (e^x - e^(-x)) / (e^x + e^(-x)).

    Совпадает с math.tanh в пределах TANH_MANUAL_MATCH_TOL при |x| < 20.
    За порогом насыщения возвращает ±1.0 вместо inf / inf.
    """
    if abs(x) > TANH_SATURATION_THRESHOLD:
        return math.copysign(1.0, x)

    exp_pos = math.exp(x)
    exp_neg = math.exp(-x)
    return (exp_pos - exp_neg) / (exp_pos + exp_neg)


def tanh_derivative(x: float) -> float:
    """
    Производная tanh: 1 - tanh(x)^2.

    Returns:
        Значение в (0, 1], максимум 1 при x = 0
    """
    t = math.tanh(x)
    return 1.0 - t * t


# =============================================================================
# RELU-СЕМЕЙСТВО
# =============================================================================


def relu(x: float) -> float:
    """
    ReLU: max(0, x).

    max(0.0, nan) вернул бы 0.0, поэтому NaN обрабатывается явно.
    """
    if x > 0:
        return x
    if math.isnan(x):
        return x
    return 0.0


def relu_derivative(x: float) -> float:
    """
    Производная ReLU: 1 при x > 0, иначе 0.

    Значение в точке x = 0 принято равным 0 (соглашение, не математическая
    необходимость).
    """
    if x > 0:
        return 1.0
    if math.isnan(x):
        return x
    return 0.0


def leaky_relu(x: float, alpha: float = LEAKY_RELU_ALPHA_DEFAULT) -> float:
    """
    Leaky ReLU: x при x > 0, иначе alpha * x.

    Args:
        x: Входное значение
        alpha: Наклон при x <= 0 (default: 0.01)
    """
    if x > 0:
        return x
    if alpha == 0.0 and not math.isnan(x):
        # -inf * 0 не определено; при alpha = 0 это обычный ReLU
        return 0.0
    return alpha * x


def leaky_relu_derivative(x: float, alpha: float = LEAKY_RELU_ALPHA_DEFAULT) -> float:
    """Производная Leaky ReLU: 1 при x > 0, иначе alpha."""
    if x > 0:
        return 1.0
    if math.isnan(x):
        return x
    return alpha


def elu(x: float, alpha: float = ELU_ALPHA_DEFAULT) -> float:
    """
    ELU: x при x > 0, иначе alpha * (e^x - 1).

    expm1 точнее e^x - 1 около нуля. elu(-inf) = -alpha.

    Args:
        x: Входное значение
        alpha: Масштаб отрицательной ветви (default: 1.0)
    """
    if x > 0:
        return x
    return alpha * math.expm1(x)


def elu_derivative(x: float, alpha: float = ELU_ALPHA_DEFAULT) -> float:
    """
    Производная ELU: 1 при x > 0, иначе elu(x, alpha) + alpha (= alpha * e^x).
    """
    if x > 0:
        return 1.0
    return elu(x, alpha) + alpha


# =============================================================================
# HARD SIGMOID / LINEAR
# =============================================================================


def hard_sigmoid(x: float) -> float:
    """Кусочно-линейная аппроксимация sigmoid: clamp(0.2 * x + 0.5, 0, 1)."""
    return clamp(HARD_SIGMOID_SLOPE * x + 0.5, 0.0, 1.0)


def hard_sigmoid_derivative(x: float) -> float:
    """Производная hard sigmoid: 0.2 на [-2.5, 2.5], иначе 0."""
    if math.isnan(x):
        return x
    if -HARD_SIGMOID_BOUND <= x <= HARD_SIGMOID_BOUND:
        return HARD_SIGMOID_SLOPE
    return 0.0


def linear(x: float) -> float:
    return x


def linear_derivative(x: float) -> float:
    if math.isnan(x):
        return x
    return 1.0


# =============================================================================
# SWISH
# =============================================================================


def swish(x: float) -> float:
    """
    Swish: x * sigmoid(x).

    При x = -inf произведение -inf * 0 не определено, предел равен 0.
    """
    if x == -math.inf:
        return 0.0
    return x * sigmoid(x)


def swish_derivative(x: float) -> float:
    """
    Производная swish: s + x * s * (1 - s), где s = sigmoid(x).

    При x = ±inf слагаемое x * s * (1 - s) не определено (inf * 0), а предел
    производной совпадает с s: 1 при +inf, 0 при -inf.
    """
    s = sigmoid(x)
    if math.isinf(x):
        return s
    return s + x * s * (1.0 - s)


# =============================================================================
# ИМЕНОВАННЫЕ ВАРИАНТЫ И РЕЕСТР
# =============================================================================


class ActivationKind(str, Enum):
    """Закрытый набор именованных активаций"""

    SIGMOID = "sigmoid"
    TANH = "tanh"
    RELU = "relu"
    LEAKY_RELU = "leaky_relu"
    ELU = "elu"
    HARD_SIGMOID = "hard_sigmoid"
    LINEAR = "linear"
    SWISH = "swish"


class ActivationParams(BaseModel):
    """
    Параметры параметризованных активаций.

    Immutable модель (frozen=True). Параметры без alpha игнорируют её.
    """

    leaky_relu_alpha: float = Field(
        LEAKY_RELU_ALPHA_DEFAULT,
        ge=0,
        allow_inf_nan=False,
        description="Наклон Leaky ReLU при x <= 0",
    )
    elu_alpha: float = Field(
        ELU_ALPHA_DEFAULT,
        ge=0,
        allow_inf_nan=False,
        description="Масштаб отрицательной ветви ELU",
    )

    model_config = {"frozen": True}


@dataclass(frozen=True)
class ScalarActivation:
    """Пара (forward, derivative) для одной именованной активации."""

    kind: ActivationKind
    forward: ScalarUnaryFn
    derivative: ScalarUnaryFn

    # Точки, где производная не существует (излом); численная проверка
    # в их окрестности не имеет смысла
    non_differentiable_at: tuple[float, ...] = ()

    @property
    def name(self) -> str:
        return self.kind.value

    def __call__(self, x: float) -> float:
        return self.forward(x)


_FIXED_ACTIVATIONS: dict[ActivationKind, ScalarActivation] = {
    ActivationKind.SIGMOID: ScalarActivation(
        ActivationKind.SIGMOID, sigmoid, sigmoid_derivative
    ),
    ActivationKind.TANH: ScalarActivation(ActivationKind.TANH, tanh, tanh_derivative),
    ActivationKind.RELU: ScalarActivation(
        ActivationKind.RELU, relu, relu_derivative, non_differentiable_at=(0.0,)
    ),
    ActivationKind.HARD_SIGMOID: ScalarActivation(
        ActivationKind.HARD_SIGMOID,
        hard_sigmoid,
        hard_sigmoid_derivative,
        non_differentiable_at=(-HARD_SIGMOID_BOUND, HARD_SIGMOID_BOUND),
    ),
    ActivationKind.LINEAR: ScalarActivation(
        ActivationKind.LINEAR, linear, linear_derivative
    ),
    ActivationKind.SWISH: ScalarActivation(
        ActivationKind.SWISH, swish, swish_derivative
    ),
}


def resolve_kind(kind: ActivationKind | str) -> ActivationKind:
    """
    Приведение имени активации к ActivationKind.

    Raises:
        ValueError: Если имя не входит в закрытый набор
    """
    try:
        return ActivationKind(kind)
    except ValueError:
        known = ", ".join(k.value for k in ActivationKind)
        raise ValueError(f"Unknown activation {kind!r}, expected one of: {known}") from None


def get_activation(
    kind: ActivationKind | str,
    params: ActivationParams | None = None,
) -> ScalarActivation:
    """
    Получение пары (forward, derivative) по имени.

    Для leaky_relu и elu alpha связывается из params. При alpha = 1 обе
    функции гладкие в нуле и излома не объявляют.

    Args:
        kind: ActivationKind или его строковое имя
        params: Параметры активаций (default: ActivationParams())

    Returns:
        ScalarActivation

    Raises:
        ValueError: Если имя неизвестно
    """
    kind = resolve_kind(kind)
    params = params or ActivationParams()

    if kind is ActivationKind.LEAKY_RELU:
        alpha = params.leaky_relu_alpha
        return ScalarActivation(
            kind,
            partial(leaky_relu, alpha=alpha),
            partial(leaky_relu_derivative, alpha=alpha),
            non_differentiable_at=() if alpha == 1.0 else (0.0,),
        )

    if kind is ActivationKind.ELU:
        alpha = params.elu_alpha
        return ScalarActivation(
            kind,
            partial(elu, alpha=alpha),
            partial(elu_derivative, alpha=alpha),
            non_differentiable_at=() if alpha == 1.0 else (0.0,),
        )

    return _FIXED_ACTIVATIONS[kind]


def list_activations() -> tuple[ActivationKind, ...]:
    """Все доступные именованные активации в порядке объявления."""
    return tuple(ActivationKind)
