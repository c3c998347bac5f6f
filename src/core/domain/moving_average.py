"""
MovingAverage — скользящее среднее по окну decimal-сэмплов

Окно фиксированной ёмкости (FIFO): при заполнении каждое добавление вытесняет
самый старый сэмпл. Среднее вычисляется по требованию через арифметику
Decimal, собственной численной логики модуль не содержит.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. len(samples) <= capacity, сэмплы упорядочены от старых к новым
2. capacity и scale неизменны после создания
3. Среднее по пустому окну → DecimalDivisionByZero
4. append и calculate атомарны друг относительно друга (внутренний RLock)
"""

import logging
from collections import deque
from dataclasses import dataclass
from threading import RLock
from typing import Any

from pydantic import BaseModel, Field, model_validator

from src.core.math.fixed_point import Decimal, DecimalDivisionByZero

logger = logging.getLogger(__name__)


# =============================================================================
# КОНФИГУРАЦИЯ
# =============================================================================


@dataclass(frozen=True)
class MovingAverageConfig:
    """Конфигурация окна скользящего среднего.

    capacity — максимальное число сэмплов (>= 1)
    scale — scale нулевого аккумулятора при расчёте среднего
    """

    capacity: int
    scale: int = 0


# =============================================================================
# SNAPSHOT
# =============================================================================


class MovingAverageSnapshot(BaseModel):
    """
    Снимок состояния окна для сериализации.

    Immutable модель. Сэмплы сериализуются как numeral-строки.
    """

    capacity: int = Field(..., gt=0, description="Ёмкость окна")
    scale: int = Field(..., description="Scale аккумулятора среднего")
    samples: list[Decimal] = Field(default_factory=list, description="Сэмплы, от старых к новым")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_window_size(self) -> "MovingAverageSnapshot":
        if len(self.samples) > self.capacity:
            raise ValueError(
                f"snapshot holds {len(self.samples)} samples, capacity is {self.capacity}"
            )
        return self


# =============================================================================
# MOVING AVERAGE
# =============================================================================


class MovingAverage:
    """Скользящее среднее по кольцевому буферу Decimal.

    Example:
        ma = MovingAverage(capacity=3, scale=0)
        for v in (1, 2, 3, 4):
            ma.append(Decimal.from_integer(v, 0))
        ma.calculate().formatted_string()  # "3"
    """

    def __init__(self, capacity: int, scale: int = 0):
        if capacity < 1:
            raise ValueError(f"capacity must be positive (>= 1), got {capacity}")

        self._capacity = capacity
        self._scale = scale
        self._samples: deque[Decimal] = deque(maxlen=capacity)
        self._lock = RLock()

    @classmethod
    def from_config(cls, config: MovingAverageConfig) -> "MovingAverage":
        return cls(capacity=config.capacity, scale=config.scale)

    @classmethod
    def from_snapshot(cls, snapshot: MovingAverageSnapshot | dict[str, Any]) -> "MovingAverage":
        """
        Восстановление окна из снимка (модели или словаря).

        Raises:
            pydantic.ValidationError: Если словарь не соответствует модели
        """
        if not isinstance(snapshot, MovingAverageSnapshot):
            snapshot = MovingAverageSnapshot.model_validate(snapshot)

        average = cls(capacity=snapshot.capacity, scale=snapshot.scale)
        for sample in snapshot.samples:
            average.append(sample)
        return average

    def __repr__(self) -> str:
        return f"MovingAverage(capacity={self._capacity}, scale={self._scale}, size={self.size()})"

    def __len__(self) -> int:
        return self.size()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def scale(self) -> int:
        return self._scale

    def size(self) -> int:
        with self._lock:
            return len(self._samples)

    def samples(self) -> tuple[Decimal, ...]:
        """Копия сэмплов окна, от старых к новым."""
        with self._lock:
            return tuple(self._samples)

    def append(self, sample: Decimal) -> None:
        """
        Добавление сэмпла. При заполненном окне самый старый вытесняется.

        Args:
            sample: Новый сэмпл (scale не приводится)
        """
        with self._lock:
            if len(self._samples) == self._capacity:
                logger.debug(
                    "moving average window full (capacity=%d), evicting %r",
                    self._capacity,
                    self._samples[0],
                )
            self._samples.append(sample)

    def calculate(self) -> Decimal:
        """
        Среднее арифметическое сэмплов окна.

        Аккумулятор стартует с нуля в scale окна, каждый сэмпл прибавляется
        через Decimal.add, сумма делится на количество сэмплов (scale 0).
        Результат в scale окна.

        Returns:
            Среднее значение

        Raises:
            DecimalDivisionByZero: Если окно пустое
        """
        with self._lock:
            if not self._samples:
                raise DecimalDivisionByZero("Can't calculate moving average of an empty window")

            total = Decimal.from_integer(0, self._scale)
            for sample in self._samples:
                total = total.add(sample)

            count = len(self._samples)

        return total.div(Decimal.from_integer(count, 0))

    def snapshot(self) -> MovingAverageSnapshot:
        with self._lock:
            return MovingAverageSnapshot(
                capacity=self._capacity,
                scale=self._scale,
                samples=list(self._samples),
            )
