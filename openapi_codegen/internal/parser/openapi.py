import logging
from typing import Any, Dict, Iterator, List, Tuple

from ..types.spec import IndexedOperation, OpenApiOperation
from ..utils.naming import function_name

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "patch", "delete", "options", "head")
DEFAULT_TAG = "default"


def iter_operations(
    document: Dict[str, Any],
) -> Iterator[Tuple[str, str, Dict[str, Any]]]:
    """Обход (путь, метод, операция) в порядке документа"""
    paths = document.get("paths") or {}
    if not isinstance(paths, dict):
        return

    for path_key, path_item in paths.items():
        if not isinstance(path_item, dict):
            logger.debug(f"Пропуск {path_key}: описание пути не объект")
            continue

        for method, operation in path_item.items():
            # parameters/summary/x-* на уровне пути операциями не являются
            if method not in HTTP_METHODS:
                continue
            if not isinstance(operation, dict):
                logger.debug(f"Пропуск {method.upper()} {path_key}: операция не объект")
                continue
            yield path_key, method, operation


def index_operation(path_key: str, method: str, raw: Dict[str, Any]) -> IndexedOperation:
    operation = OpenApiOperation.model_validate(raw)
    return IndexedOperation.model_validate(
        {
            **operation.model_dump(),
            "method": method,
            "path_key": path_key,
            "fn_name": function_name(operation, path_key, method),
        }
    )


def pick_tags(operation: IndexedOperation) -> List[str]:
    return operation.tags or [DEFAULT_TAG]


def index_by_tag(document: Dict[str, Any]) -> Dict[str, List[IndexedOperation]]:
    """
    Группировка операций по тегам.

    Операция без тегов попадает в ``default``; операция с несколькими тегами
    добавляется в каждый из них (повторяющиеся теги - столько же раз).
    Порядок внутри группы совпадает с порядком объявления в спецификации.
    """
    by_tag: Dict[str, List[IndexedOperation]] = {}

    for path_key, method, raw in iter_operations(document):
        entry = index_operation(path_key, method, raw)
        for tag in pick_tags(entry):
            by_tag.setdefault(tag, []).append(entry)

    return by_tag
