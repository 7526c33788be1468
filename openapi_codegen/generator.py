"""
Главный модуль генератора - чистый интерфейс и запись файлов
"""

import logging
import os
from typing import Any, Dict, List, Optional

import httpx

from .exceptions import WriteFailure
from .internal.generator.client_generator import ClientGenerator
from .internal.parser.loader import DEFAULT_MAX_REDIRECTS, fetch_spec
from .internal.types.emission_plan import EmissionPlan
from .internal.types.models import Project

logger = logging.getLogger(__name__)


class ApiClientGenerator:
    """Чистый интерфейс для генерации API клиентов (без ввода-вывода)"""

    def __init__(self, openapi_spec: Dict[str, Any], encode_path_params: bool = False):
        self.client_generator = ClientGenerator(openapi_spec, encode_path_params)

    @property
    def plan(self) -> EmissionPlan:
        return self.client_generator.plan

    def generate(self) -> Project:
        """Генерация проекта клиента"""
        return self.client_generator.generate()


def generate_client(openapi_spec: Dict[str, Any], encode_path_params: bool = False) -> Project:
    """Создание API клиента из уже загруженной OpenAPI спецификации"""
    return ApiClientGenerator(openapi_spec, encode_path_params).generate()


def write_project(
    project: Project, target_path: str, plan: Optional[EmissionPlan] = None
) -> List[str]:
    """
    Запись файлов проекта в порядке их добавления.

    Существующие файлы перезаписываются. При ошибке запись прерывается,
    уже записанные файлы остаются на месте.
    """
    try:
        os.makedirs(target_path, exist_ok=True)
    except OSError as exc:
        raise WriteFailure(f"Не удалось создать {target_path}: {exc}", path=target_path) from exc

    counts = {entry.file_name: entry.operation_count for entry in plan or []}
    written = []

    for code_file in project.files:
        path = os.path.join(target_path, code_file.file_name)
        if code_file.file_name in counts:
            logger.info(f"📝 Запись {path} ({counts[code_file.file_name]} операций)")
        else:
            logger.info(f"📝 Запись {path}")

        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(str(code_file))
        except OSError as exc:
            raise WriteFailure(f"Не удалось записать {path}: {exc}", path=path) from exc

        written.append(path)

    return written


def generate(
    spec_url: str,
    out_dir: str,
    *,
    encode_path_params: bool = False,
    max_redirects: int = DEFAULT_MAX_REDIRECTS,
    timeout: Optional[float] = None,
    client: Optional[httpx.Client] = None,
) -> Project:
    """
    Полный цикл: загрузка спецификации, генерация и запись файлов.

    Спецификация загружается до любой записи, поэтому ошибка загрузки
    не оставляет частичного результата.
    """
    logger.info(f"📥 Загрузка OpenAPI спецификации: {spec_url}")
    openapi_spec = fetch_spec(
        spec_url, max_redirects=max_redirects, timeout=timeout, client=client
    )

    logger.info("⚙️ Генерация кода...")
    generator = ApiClientGenerator(openapi_spec, encode_path_params)
    project = generator.generate()

    write_project(project, out_dir, generator.plan)
    logger.info(f"✅ Клиент создан в: {os.path.abspath(out_dir)}")
    return project
