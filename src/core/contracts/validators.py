"""
JSON Schema Contract Validators

Модуль для валидации сериализованных данных согласно формальным JSON Schema
контрактам. Использует библиотеку jsonschema для проверки соответствия данных
схемам.

Схемы поставляются внутри пакета (src/core/contracts/schema/) и читаются
через importlib.resources, поэтому доступны и после обычной установки:
- decimal_numeral.json — numeral-строка fixed-point decimal
- moving_average_snapshot.json — снимок окна скользящего среднего
"""

import json
import logging
from functools import lru_cache
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator

logger = logging.getLogger(__name__)

# Пакет, в котором лежит каталог schema/
SCHEMA_PACKAGE = "src.core.contracts"
SCHEMA_SUBDIR = "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов с кэшем.

    По умолчанию читает схемы, поставляемые с пакетом (package data
    SCHEMA_PACKAGE/SCHEMA_SUBDIR). Явный каталог (Path или Traversable)
    нужен для собственных наборов схем и тестов.

    Example:
        loader = SchemaLoader()
        schema = loader.load_schema("decimal_numeral")
    """

    def __init__(self, schema_dir: Path | Traversable | None = None):
        if schema_dir is None:
            schema_dir = resources.files(SCHEMA_PACKAGE) / SCHEMA_SUBDIR
        if not schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {schema_dir}")

        self._schema_dir = schema_dir
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path | Traversable:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Повторный вызов с тем же именем возвращает тот же объект из кэша.

        Args:
            schema_name: Имя схемы без расширения (например, 'decimal_numeral')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        resource = self._schema_dir / f"{schema_name}.json"
        if not resource.is_file():
            raise FileNotFoundError(f"Schema not found: {resource}")

        schema = json.loads(resource.read_text(encoding="utf-8"))

        # Meta-validation самой схемы
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        logger.debug("loaded contract schema %s from %s", schema_name, resource)
        self._schemas[schema_name] = schema
        return schema


@lru_cache(maxsize=None)
def default_schema_loader() -> SchemaLoader:
    """Общий загрузчик пакетных схем, создаётся при первом обращении."""
    return SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.

    Args:
        schema_name: Имя схемы без расширения
        loader: Загрузчик схем (default: default_schema_loader())
    """

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        if loader is None:
            loader = default_schema_loader()
        self.schema_name = schema_name
        self.schema = loader.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Валидация данных против схемы.

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class DecimalNumeralValidator(ContractValidator):
    """Валидатор numeral-строки decimal."""

    def __init__(self):
        super().__init__("decimal_numeral")


class MovingAverageSnapshotValidator(ContractValidator):
    """Валидатор снимка окна скользящего среднего."""

    def __init__(self):
        super().__init__("moving_average_snapshot")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_decimal_numeral(data: Any) -> None:
    """
    Валидация сериализованного decimal.

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    DecimalNumeralValidator().validate(data)


def validate_moving_average_snapshot(data: Dict[str, Any]) -> None:
    """
    Валидация сериализованного снимка скользящего среднего.

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    MovingAverageSnapshotValidator().validate(data)
