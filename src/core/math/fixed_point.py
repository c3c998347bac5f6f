"""
Fixed-Point Decimal — десятичное число с явным scale

Значение = magnitude × 10^scale, где magnitude — целое произвольной точности.

Модуль обеспечивает:
- Rescale с усечением к нулю (единственный примитив выравнивания scale)
- Арифметику add/sub/mul/div с фиксированной политикой выбора scale
- Сравнение, не зависящее от исходных scale операндов
- Форматирование (сырое magnitude и numeral с десятичной точкой)
- Сериализацию в numeral-строку через Pydantic

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Decimal неизменяем: каждая операция возвращает новый экземпляр
2. Потеря точности только при rescale к большему scale, всегда усечение к нулю
   (-12 / 10 → -1, а не -2)
3. Нормализация не выполняется: (120, -2) и (12, -1) — разные структуры,
   равенство значений определяется только через cmp()
4. Деление на ноль → DecimalDivisionByZero, никогда не молчаливый результат

ПОЛИТИКА SCALE (s1 — левый операнд, s2 — правый, min = min(s1, s2)):
    add: правый операнд → s1, результат в s1
    sub: оба → min, результат → s1
    mul: оба → min, произведение в 2×min, результат → s1
    div: левый → scratch + s1, правый → scratch, результат в s1
    cmp: оба → min
"""

import math
from typing import Any, Final

from pydantic import BaseModel, Field, ValidationError, model_serializer, model_validator

from src.core.math.numeral import (
    DecimalParseError,
    format_numeral,
    int_to_digits,
    parse_integer_literal,
    parse_numeral,
)

# =============================================================================
# ПАРАМЕТРЫ ДЕЛЕНИЯ
# =============================================================================

# Показатель для scratch-scale деления: scratch = -(|min(s1, s2)| ** exp)
# Для любого exp >= 1 оба rescale в div являются умножениями, поэтому частное равно
# точному рациональному частному, усечённому к нулю в scale левого операнда.
# Параметр влияет только на размер промежуточных magnitude.
DIVISION_SCRATCH_EXPONENT: Final[int] = 2


# =============================================================================
# EXCEPTIONS
# =============================================================================


class DecimalDivisionByZero(ZeroDivisionError):
    """
    Деление decimal на нулевое значение.

    Поднимается Decimal.div() и расчётом среднего по пустому окну.
    """

    pass


# =============================================================================
# ЦЕЛОЧИСЛЕННЫЕ ПРИМИТИВЫ
# =============================================================================


def truncating_divide(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с усечением к нулю.

    Оператор // в Python округляет к минус бесконечности, поэтому деление
    выполняется над модулями, а знак восстанавливается отдельно.

    Args:
        numerator: Делимое
        denominator: Делитель

    Returns:
        Частное, усечённое к нулю

    Raises:
        DecimalDivisionByZero: Если denominator == 0

    Examples:
        >>> truncating_divide(-12, 10)
        -1
        >>> truncating_divide(12, -10)
        -1
        >>> truncating_divide(19, 10)
        1
    """
    if denominator == 0:
        raise DecimalDivisionByZero("Decimal division by zero")

    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def require_int(value: Any, name: str) -> int:
    """
    Проверка, что value — целое (int, но не bool).

    Raises:
        TypeError: Если value не int; float не усекается молча
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be int, got {type(value).__name__}: {value!r}")
    return value


def smallest_scale(s1: int, s2: int) -> int:
    """Меньший (более точный) из двух scale."""
    return min(s1, s2)


def division_scratch_scale(
    s1: int,
    s2: int,
    exponent: int = DIVISION_SCRATCH_EXPONENT,
) -> int:
    """
    Scratch-scale для деления: -(|min(s1, s2)| ** exponent).

    Args:
        s1: Scale делимого
        s2: Scale делителя
        exponent: Показатель (default: DIVISION_SCRATCH_EXPONENT)

    Returns:
        Неположительный scale, не больший min(s1, s2)

    Raises:
        ValueError: Если exponent < 1

    Examples:
        >>> division_scratch_scale(-1, -3)
        -9
        >>> division_scratch_scale(0, 0)
        0
        >>> division_scratch_scale(3, 2)
        -4
    """
    if exponent < 1:
        raise ValueError(f"exponent must be >= 1, got {exponent}")

    return -(abs(smallest_scale(s1, s2)) ** exponent)


# =============================================================================
# DECIMAL
# =============================================================================


class Decimal(BaseModel):
    """
    Fixed-point decimal: magnitude × 10^scale.

    Immutable модель (frozen=True). Все операции строят новый экземпляр,
    операнды никогда не изменяются.

    Сериализуется в numeral-строку с десятичной точкой
    (Decimal(magnitude=1234, scale=-2) → "12.34"), валидируется из такой же
    строки либо из словаря {"magnitude": ..., "scale": ...}.
    """

    magnitude: int = Field(..., description="Целое значение произвольной точности (со знаком)")
    scale: int = Field(..., description="Показатель степени десяти (-3 → 3 дробных знака)")

    model_config = {"frozen": True}  # Immutable

    # -------------------------------------------------------------------------
    # Pydantic: numeral <-> model
    # -------------------------------------------------------------------------

    @model_validator(mode="before")
    @classmethod
    def parse_numeral_input(cls, data: Any) -> Any:
        """Numeral-строка разбирается в поля magnitude/scale."""
        if isinstance(data, str):
            magnitude, scale = parse_numeral(data)
            return {"magnitude": magnitude, "scale": scale}
        return data

    @model_serializer
    def serialize_numeral(self) -> str:
        return self.formatted_string()

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def _new(cls, magnitude: int, scale: int) -> "Decimal":
        # Внутренние результаты уже корректны, валидация не нужна
        return cls.model_construct(magnitude=magnitude, scale=scale)

    @classmethod
    def from_integer(cls, value: int, scale: int) -> "Decimal":
        """
        Decimal из целого значения и явного scale.

        Examples:
            >>> Decimal.from_integer(1234, -2).formatted_string()
            '12.34'

        Raises:
            TypeError: Если value или scale не int
        """
        return cls._new(require_int(value, "value"), require_int(scale, "scale"))

    @classmethod
    def from_string(cls, text: str, scale: int) -> "Decimal":
        """
        Decimal из base-10 целочисленного литерала и явного scale.

        Вся строка трактуется как magnitude: десятичная точка НЕ
        интерпретируется, scale присваивается как есть.

        Raises:
            DecimalParseError: Если text не целочисленный литерал
            TypeError: Если scale не int
        """
        scale = require_int(scale, "scale")
        return cls._new(parse_integer_literal(text), scale)

    @classmethod
    def from_float(cls, value: float, scale: int) -> "Decimal":
        """
        Decimal из float: magnitude = trunc(value × 10^-scale).

        ВАЖНО: умножение выполняется во float, поэтому точность ограничена
        мантиссой double (~15-17 значащих цифр). Это известный потолок
        точности, а не ошибка. Для точных значений используйте from_string().

        Raises:
            DecimalParseError: Если value или произведение — NaN/Inf
            TypeError: Если scale не int
        """
        scale = require_int(scale, "scale")
        try:
            scaled = value * math.pow(10.0, -scale)
        except OverflowError as e:
            raise DecimalParseError(f"Float {value!r} overflows at scale {scale}") from e

        if not math.isfinite(scaled):
            raise DecimalParseError(f"Float {value!r} at scale {scale} is not finite")

        return cls._new(int(scaled), scale)

    @classmethod
    def parse(cls, text: str) -> "Decimal":
        """
        Decimal из numeral с необязательной десятичной точкой.

        scale = минус количество цифр после точки.

        Raises:
            DecimalParseError: Если numeral некорректен
        """
        magnitude, scale = parse_numeral(text)
        return cls._new(magnitude, scale)

    @classmethod
    def from_json(cls, raw: str | bytes) -> "Decimal":
        """
        Десериализация из JSON (строка-numeral в кавычках).

        Raises:
            DecimalParseError: Если JSON или numeral некорректны
        """
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise DecimalParseError(f"Can't deserialize decimal from {raw!r}") from e

    def to_json(self) -> str:
        """Сериализация в JSON-строку с numeral (например, '"12.34"')."""
        return self.model_dump_json()

    # -------------------------------------------------------------------------
    # Rescale
    # -------------------------------------------------------------------------

    def rescale(self, scale: int) -> "Decimal":
        """
        Decimal с заданным scale.

        Результат может потерять точность, если scale больше исходного
        (деление с усечением к нулю). Переход к меньшему scale точен.

        Example:
            d = Decimal.from_integer(12345, -4)   # 1.2345
            d.rescale(-1)                          # 1.2
            d.rescale(-1).rescale(-4)              # 1.2000
        """
        diff = scale - self.scale

        if diff > 0:
            return Decimal._new(truncating_divide(self.magnitude, 10**diff), scale)
        if diff < 0:
            return Decimal._new(self.magnitude * 10**-diff, scale)
        return Decimal._new(self.magnitude, scale)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def abs(self) -> "Decimal":
        return Decimal._new(abs(self.magnitude), self.scale)

    def add(self, other: "Decimal") -> "Decimal":
        """self + other в scale self (other усекается до scale self)."""
        return Decimal._new(self.magnitude + other.rescale(self.scale).magnitude, self.scale)

    def sub(self, other: "Decimal") -> "Decimal":
        """self - other, вычисляется в min scale, результат в scale self."""
        base_scale = smallest_scale(self.scale, other.scale)
        left = self.rescale(base_scale)
        right = other.rescale(base_scale)

        return Decimal._new(left.magnitude - right.magnitude, base_scale).rescale(self.scale)

    def mul(self, other: "Decimal") -> "Decimal":
        """self × other, вычисляется в min scale, результат в scale self."""
        base_scale = smallest_scale(self.scale, other.scale)
        left = self.rescale(base_scale)
        right = other.rescale(base_scale)

        return Decimal._new(left.magnitude * right.magnitude, 2 * base_scale).rescale(self.scale)

    def div(self, other: "Decimal") -> "Decimal":
        """
        self / other, усечение к нулю в scale self.

        Делимое расширяется до scratch + s1, делитель до scratch, поэтому
        целочисленное частное сразу получается в scale self.

        Raises:
            DecimalDivisionByZero: Если other равен нулю
        """
        if other.magnitude == 0:
            raise DecimalDivisionByZero(
                f"Decimal division by zero: {self.formatted_string()} / {other.formatted_string()}"
            )

        base_scale = division_scratch_scale(self.scale, other.scale)
        left = self.rescale(base_scale + self.scale)
        right = other.rescale(base_scale)

        return Decimal._new(truncating_divide(left.magnitude, right.magnitude), self.scale)

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def cmp(self, other: "Decimal") -> int:
        """
        Сравнение значений.

        Returns:
            -1 если self <  other
             0 если self == other
            +1 если self >  other
        """
        base_scale = smallest_scale(self.scale, other.scale)
        left = self.rescale(base_scale).magnitude
        right = other.rescale(base_scale).magnitude

        if left < right:
            return -1
        if left > right:
            return 1
        return 0

    def is_zero(self) -> bool:
        return self.magnitude == 0

    # -------------------------------------------------------------------------
    # Форматирование
    # -------------------------------------------------------------------------

    def formatted_string(self) -> str:
        """
        Значение с десятичной точкой.

        Example:
            Decimal.from_integer(-12345, -3).formatted_string()  # "-12.345"
        """
        return format_numeral(self.magnitude, self.scale)

    def string_scaled(self, scale: int) -> str:
        """Rescale, затем сырое magnitude без точки."""
        return str(self.rescale(scale))

    def __str__(self) -> str:
        # Сырое magnitude без учёта scale: Decimal(-12345, -3) → "-12345"
        return int_to_digits(self.magnitude)

    def __repr__(self) -> str:
        return f"Decimal(magnitude={int_to_digits(self.magnitude)}, scale={self.scale})"

    # -------------------------------------------------------------------------
    # Python-протоколы
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "Decimal":
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "Decimal":
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, other: object) -> "Decimal":
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other: object) -> "Decimal":
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.div(other)

    def __abs__(self) -> "Decimal":
        return self.abs()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) == 0

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) != 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) >= 0

    def __hash__(self) -> int:
        # Равные по значению decimal обязаны иметь равный hash
        magnitude, scale = self.magnitude, self.scale
        if magnitude == 0:
            return hash((0, 0))
        while magnitude % 10 == 0:
            magnitude //= 10
            scale += 1
        return hash((magnitude, scale))
