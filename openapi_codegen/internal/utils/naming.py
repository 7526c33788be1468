"""Утилиты для построения имен функций, классов и модулей"""

import keyword
import re
from typing import Iterable, List

_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_]+")
_REPEATED_UNDERSCORES = re.compile(r"_{2,}")
_PLACEHOLDER = re.compile(r"\{.*?\}")


def to_identifier(raw: str) -> str:
    """
    Приводит произвольную строку из спецификации к безопасному идентификатору.

    Каждая последовательность символов вне ``[A-Za-z0-9_]`` заменяется одним
    подчеркиванием, подчеркивания по краям убираются, повторы схлопываются.
    Функция тотальна: пустая строка или строка из одних недопустимых символов
    дает пустой результат.

    Examples:
        >>> to_identifier("list-users.v2")
        'list_users_v2'
        >>> to_identifier("__a__b__")
        'a_b'
        >>> to_identifier("тест")
        ''
    """
    if not raw:
        return ""
    name = _INVALID_CHARS.sub("_", str(raw))
    name = name.strip("_")
    return _REPEATED_UNDERSCORES.sub("_", name)


def python_identifier(name: str, digit_prefix: str) -> str:
    """Делает санитизированное имя допустимым в Python: префикс для цифры, суффикс для ключевых слов"""
    if name and name[0].isdigit():
        name = digit_prefix + name
    if keyword.iskeyword(name):
        name += "_"
    return name


def path_function_name(path_key: str, method: str) -> str:
    """Имя функции из пути: /users/{id}/orders -> get_users_orders"""
    segments = [_PLACEHOLDER.sub("", s) for s in path_key.split("/") if s]
    from_path = "_".join(s for s in segments if s)
    return to_identifier(f"{method}_{from_path or 'root'}")


def function_name(operation, path_key: str, method: str) -> str:
    """
    Имя метода для операции.

    Берется ``operationId``, если он есть и после санитизации не пуст,
    иначе имя выводится из метода и пути.
    """
    name = ""
    if operation.operation_id:
        name = to_identifier(operation.operation_id)
    if not name:
        name = path_function_name(path_key, method)
    return python_identifier(name, digit_prefix="op_")


def unique_param_names(parameters: Iterable) -> List[str]:
    """Имена параметров без пустых и без повторов, в порядке первого появления"""
    names = [p.name for p in parameters if p is not None and p.name]
    return list(dict.fromkeys(names))


def tag_class_name(tag: str, suffix: str = "Api") -> str:
    """users -> UsersApi, 2fa -> Tag2faApi"""
    name = to_identifier(tag[:1].upper() + tag[1:]) or "Default"
    if name[0].isdigit():
        name = "Tag" + name
    return name + suffix


def tag_module_name(tag: str, suffix: str = "_api") -> str:
    """Users -> users_api"""
    name = to_identifier(tag.lower()) or "default"
    if name[0].isdigit():
        name = "tag_" + name
    return name + suffix
