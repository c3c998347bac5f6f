"""
Numeral — разбор и форматирование десятичных строк

Низкоуровневые операции над строковым представлением fixed-point чисел:
- Разбор целочисленного литерала (magnitude без десятичной точки)
- Разбор numeral со (необязательной) десятичной точкой → (magnitude, scale)
- Форматирование (magnitude, scale) в numeral с десятичной точкой

Соглашение о scale: значение = magnitude × 10^scale.
scale = -3 означает 3 дробных знака, scale = +2 означает два подразумеваемых
нуля в конце.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Знак никогда не участвует в разбиении строки цифр (префиксуется отдельно)
2. При scale < 0 форматирование выдаёт ровно -scale дробных цифр
3. Любой некорректный ввод → DecimalParseError (никогда не молчаливый 0)
4. Число цифр не ограничено: преобразования int <-> str идут порциями
   и не упираются в лимит интерпретатора (4300 цифр по умолчанию)
"""

import re
from typing import Final

# =============================================================================
# ШАБЛОНЫ
# =============================================================================

# Целочисленный литерал: необязательный ведущий '-', только ASCII цифры
INTEGER_LITERAL_PATTERN: Final[str] = r"-?[0-9]+"

# Numeral: необязательный '-', цифры с не более чем одной десятичной точкой
# Допускаются "1.", ".5"; хотя бы одна цифра обязательна
NUMERAL_PATTERN: Final[str] = r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)"

_INTEGER_LITERAL_RE: Final[re.Pattern[str]] = re.compile(INTEGER_LITERAL_PATTERN)
_NUMERAL_RE: Final[re.Pattern[str]] = re.compile(NUMERAL_PATTERN)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class DecimalParseError(ValueError):
    """
    Некорректное строковое (или float) представление decimal.

    Поднимается при разборе целочисленного литерала, при десериализации
    numeral и при попытке построить decimal из NaN/Inf.
    """

    pass


# =============================================================================
# ЦИФРЫ ПРОИЗВОЛЬНОЙ ДЛИНЫ
# =============================================================================

# Порция цифр для одного int()/str(). Меньше минимального допустимого
# значения sys.set_int_max_str_digits (640), поэтому лимит интерпретатора
# на преобразование int <-> str никогда не срабатывает
_CHUNK_DIGITS: Final[int] = 500
_CHUNK_LIMIT: Final[int] = 10**_CHUNK_DIGITS

# log10(2) × 10^5: оценка числа десятичных цифр по bit_length()
_LOG10_2_SCALED: Final[int] = 30103


def digits_to_int(digits: str) -> int:
    """
    Строка ASCII цифр (без знака) → неотрицательное целое.

    Длинная строка делится пополам, половины собираются как
    high × 10^k + low, поэтому длина строки не ограничена.

    Args:
        digits: Непустая строка цифр 0-9

    Returns:
        Неотрицательное целое

    Examples:
        >>> digits_to_int("000123")
        123
    """
    if len(digits) <= _CHUNK_DIGITS:
        return int(digits)

    split = len(digits) // 2
    high = digits_to_int(digits[:-split])
    low = digits_to_int(digits[-split:])
    return high * 10**split + low


def int_to_digits(value: int) -> str:
    """
    Целое → десятичная строка без ограничения на число цифр.

    Args:
        value: Целое (со знаком)

    Returns:
        Строка как у str(value): "-" для отрицательных, без ведущих нулей

    Examples:
        >>> int_to_digits(-1200)
        '-1200'
    """
    if value < 0:
        return "-" + _int_to_digits(-value, 0)
    return _int_to_digits(value, 0)


def _int_to_digits(value: int, width: int) -> str:
    # width > 0: результат дополняется нулями слева до width цифр
    if value < _CHUNK_LIMIT:
        text = str(value)
        return text.zfill(width) if width else text

    if width:
        split = width // 2
    else:
        split = value.bit_length() * _LOG10_2_SCALED // 100000 // 2

    high, low = divmod(value, 10**split)
    return _int_to_digits(high, width - split if width else 0) + _int_to_digits(low, split)


# =============================================================================
# РАЗБОР
# =============================================================================


def parse_integer_literal(text: str) -> int:
    """
    Разбор base-10 целочисленного литерала.

    Строка целиком трактуется как целое число: десятичная точка
    НЕ интерпретируется и считается ошибкой.

    Args:
        text: Литерал (например, "1234" или "-1234")

    Returns:
        Целое значение произвольной точности

    Raises:
        DecimalParseError: Если строка не является целочисленным литералом

    Examples:
        >>> parse_integer_literal("-1234")
        -1234
        >>> parse_integer_literal("qwert")  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        DecimalParseError: ...
    """
    if not isinstance(text, str) or _INTEGER_LITERAL_RE.fullmatch(text) is None:
        raise DecimalParseError(f"Can't convert to decimal: {text!r} is not a base-10 integer literal")

    if text.startswith("-"):
        return -digits_to_int(text[1:])
    return digits_to_int(text)


def parse_numeral(text: str) -> tuple[int, int]:
    """
    Разбор numeral с необязательной десятичной точкой.

    magnitude — все цифры без точки, scale — минус количество цифр после точки.

    Args:
        text: Numeral (например, "12.34", "-0.001", "1234")

    Returns:
        Пара (magnitude, scale)

    Raises:
        DecimalParseError: Если точек больше одной, есть посторонние символы
            или нет ни одной цифры

    Examples:
        >>> parse_numeral("12.34")
        (1234, -2)
        >>> parse_numeral("-0.001")
        (-1, -3)
        >>> parse_numeral("1234")
        (1234, 0)
    """
    if not isinstance(text, str) or _NUMERAL_RE.fullmatch(text) is None:
        raise DecimalParseError(f"Malformed decimal numeral: {text!r}")

    integer_part, _, fraction_part = text.partition(".")
    negative = integer_part.startswith("-")

    # "-.5" → "5", знак отдельно
    magnitude = digits_to_int(integer_part.lstrip("-") + fraction_part)
    return (-magnitude if negative else magnitude), -len(fraction_part)


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


def format_numeral(magnitude: int, scale: int) -> str:
    """
    Форматирование (magnitude, scale) в numeral с десятичной точкой.

    Алгоритм:
        scale >= 0: magnitude × 10^scale, без точки
        scale < 0:  строка цифр |magnitude| делится на целую и дробную части
                    в позиции len + scale; если цифр не больше -scale,
                    целая часть "0", а дробная дополняется нулями слева

    Число цифр, равное -scale, даёт ведущий "0": (1234, -4) → "0.1234", а не
    ".1234" с пустой целой частью. Дробных цифр по-прежнему ровно -scale,
    parse_numeral принимает обе записи.

    Args:
        magnitude: Целое значение (со знаком)
        scale: Показатель степени десяти

    Returns:
        Numeral, например "12.34", "-12.34", "123400", "0.001234"
    """
    if scale >= 0:
        if magnitude == 0:
            return "0"
        return int_to_digits(magnitude) + "0" * scale

    digits = int_to_digits(abs(magnitude))
    fraction_len = -scale

    if len(digits) > fraction_len:
        integer_part = digits[: len(digits) - fraction_len]
        fraction_part = digits[len(digits) - fraction_len :]
    else:
        integer_part = "0"
        fraction_part = "0" * (fraction_len - len(digits)) + digits

    sign = "-" if magnitude < 0 else ""
    return f"{sign}{integer_part}.{fraction_part}"
