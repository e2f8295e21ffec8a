# === FILE: link_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера LinkScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

#: верхняя граница размера пула воркеров
MAX_WORKERS = 1000


def recommended_workers(max_depth: int, cap: int = MAX_WORKERS) -> int:
    """
    Размер пула по глубине: число достижимых страниц растёт примерно
    геометрически, поэтому 10 ** (depth - 1), но не больше *cap*.
    Для неограниченной глубины (0) берётся *cap*.
    """
    if max_depth == 0:
        return cap
    return min(10 ** (max_depth - 1), cap)


class CrawlerConfig(BaseModel):
    """Конфигурация одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str = Field(..., min_length=1, description="Стартовый URL обхода.")
    max_depth: int = Field(3, ge=0, description="Максимальная глубина обхода, 0 — без ограничения.")
    workers: int = Field(0, ge=0, description="Размер пула воркеров, 0 — подобрать по глубине.")
    max_workers: int = Field(MAX_WORKERS, ge=1, description="Верхняя граница подобранного пула.")
    queue_factor: int = Field(1000, ge=1, description="Ёмкость очереди на одного воркера.")
    fetch_timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    crawl_timeout: Optional[float] = Field(None, gt=0, description="Таймаут всего обхода (секунд).")
    user_agent: str = Field("LinkScout/0.1", min_length=1, description="Заголовок User-Agent.")
    keep_alive: bool = Field(False, description="Переиспользовать HTTP-соединения.")

    @property
    def pool_size(self) -> int:
        return self.workers or recommended_workers(self.max_depth, self.max_workers)

    @property
    def frontier_capacity(self) -> int:
        return self.pool_size * self.queue_factor


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config_data(path: Union[str, Path]) -> Dict[str, Any]:
    """Читает YAML или JSON и возвращает сырой mapping без проверки схемы."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def build_config(data: Dict[str, Any], **overrides: Any) -> CrawlerConfig:
    """Накладывает непустые *overrides* (например, флаги CLI) на *data* и проверяет схему."""
    merged = dict(data)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlerConfig(**merged)


def load_config(path: Union[str, Path], **overrides: Any) -> CrawlerConfig:
    """
    Читает файл конфигурации и возвращает проверенный CrawlerConfig.
    При отсутствии файла бросает FileNotFoundError, при ошибке схемы — ValidationError.
    """
    return build_config(load_config_data(path), **overrides)
