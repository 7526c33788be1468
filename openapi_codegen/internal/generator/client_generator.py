import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from ..parser.openapi import index_by_tag
from ..types.emission_plan import EmissionPlan
from ..types.models import (
    CodeBlock,
    CodeFile,
    Function,
    Parameter,
    Project,
    Variable,
    escape_control_chars,
)
from ..types.spec import IndexedOperation
from ..utils.naming import tag_class_name, tag_module_name
from .templates import templates

logger = logging.getLogger(__name__)

TRANSPORT_FILE = "common.py"
BARREL_FILE = "__init__.py"

_PATH_PLACEHOLDER = re.compile(r"(\{.*?\})")

_MAPPING = Variable(value=["str", "Any"], wrap_name="Dict")
_OPTIONAL_MAPPING = Variable(value=_MAPPING, wrap_name="Optional")
_HEADERS = Variable(value=Variable(value=["str", "str"], wrap_name="Dict"), wrap_name="Optional")


def build_transport_file() -> CodeFile:
    code_file = CodeFile(file_name=TRANSPORT_FILE, header=list(templates.transport_header))
    code_file.add_code_block(CodeBlock(code=templates.transport))
    return code_file


def render_transport_helper() -> str:
    """Исходный код общего HTTP помощника (common.py)"""
    return str(build_transport_file())


def path_expression(
    path_key: str, names: Optional[Iterable[str]] = None, encode: bool = False
) -> str:
    """
    Python-выражение пути с подстановкой path параметров.

    ``/users/{id}`` -> ``'/users/' + str(path_params['id'])``. Ключи берутся
    как объявлены в спецификации. Без ``encode`` значения подставляются как
    есть, с ``encode`` - через ``quote(value, safe='')``.

    Если передан ``names``, подставляются только объявленные параметры,
    остальные плейсхолдеры остаются в пути текстом.
    """
    declared = None if names is None else set(names)

    parts = []
    for chunk in _PATH_PLACEHOLDER.split(path_key):
        if not chunk:
            continue
        name = chunk[1:-1]
        if _PATH_PLACEHOLDER.fullmatch(chunk) and (declared is None or name in declared):
            value = f"str(path_params[{name!r}])"
            parts.append(f"quote({value}, safe='')" if encode else value)
        else:
            parts.append(repr(chunk))

    return " + ".join(parts) if parts else repr("")


def _operation_description(operation: IndexedOperation) -> str:
    lines = []
    if operation.summary:
        lines.append(operation.summary)
    lines.append(f"{operation.method.upper()} {operation.path_key}")
    return "\n\n".join(lines)


def build_operation_function(
    operation: IndexedOperation, encode_path_params: bool = False
) -> Function:
    """Метод API класса для одной операции; аргументы только те, что нужны"""
    path = path_expression(operation.path_key, operation.path_params, encode_path_params)

    parameters = [Parameter(name="self")]
    call = [f"path={path},", f"method={operation.method.upper()!r},"]

    if operation.path_params:
        parameters.append(Parameter(name="path_params", var_type=_MAPPING))
    if operation.query_params:
        parameters.append(Parameter(name="query", var_type=_OPTIONAL_MAPPING, default="None"))
        call.append("query=query,")
    if operation.header_params:
        parameters.append(Parameter(name="headers", var_type=_HEADERS, default="None"))
        call.append("headers=headers,")
    if operation.has_body:
        parameters.append(Parameter(name="body", var_type=Variable(value="Any"), default="None"))
        call.append("body=body,")

    code = "return await self._http.request(\n" + "".join(f"\t{line}\n" for line in call) + ")"

    return Function(
        name=operation.fn_name,
        parameters=parameters,
        response="Any",
        async_def=True,
        description=_operation_description(operation),
        code=CodeBlock(code=code),
    )


def build_api_module(
    tag: str,
    operations: List[IndexedOperation],
    class_name: Optional[str] = None,
    file_name: Optional[str] = None,
    encode_path_params: bool = False,
) -> CodeFile:
    class_name = class_name or tag_class_name(tag)
    file_name = file_name or f"{tag_module_name(tag)}.py"

    header_tag = escape_control_chars(" ".join(tag.splitlines()))
    code_file = CodeFile(
        file_name=file_name,
        header=[templates.api_header.format(tag=header_tag)],
        imports=list(
            templates.api_imports_encoded if encode_path_params else templates.api_imports
        ),
    )

    api_class = code_file.add_class(class_name)
    api_class.add_function(
        "__init__",
        parameters=[
            Parameter(name="self"),
            Parameter(name="http", var_type=Variable(value="HttpClient")),
        ],
        response="None",
        code=CodeBlock(code="self._http = http"),
    )

    for operation in operations:
        api_class.add_function(build_operation_function(operation, encode_path_params))

    code_file.add_code_block(CodeBlock(code=f"__all__ = [{class_name!r}]", order=1))
    return code_file


def render_api_module(
    tag: str,
    operations: List[IndexedOperation],
    class_name: Optional[str] = None,
    encode_path_params: bool = False,
) -> str:
    """Исходный код модуля одного тега"""
    return str(
        build_api_module(tag, operations, class_name, encode_path_params=encode_path_params)
    )


def build_barrel(plan: EmissionPlan) -> CodeFile:
    code_file = CodeFile(file_name=BARREL_FILE, header=list(templates.barrel_header))

    exported = []
    for entry in plan:
        code_file.imports.append(f"from .{entry.module_name} import {entry.class_name}")
        exported.append(entry.class_name)

    code_file.imports.extend(
        [
            "from .common import *",
            "from .common import __all__ as _common_all",
        ]
    )

    names = "".join(f"{name!r}, " for name in exported)
    code_file.add_code_block(CodeBlock(code=f"__all__ = [{names}*_common_all]"))
    return code_file


def render_barrel(plan: EmissionPlan) -> str:
    """Исходный код __init__.py: реэкспорт всех API классов и common"""
    return str(build_barrel(plan))


class ClientGenerator:
    """Генератор клиента: common.py, модуль на каждый тег и __init__.py"""

    def __init__(self, openapi_dict: Dict[str, Any], encode_path_params: bool = False):
        self.openapi_dict = openapi_dict
        self.encode_path_params = encode_path_params
        self.project = Project(name="api")
        self.plan = EmissionPlan()
        self.groups: Dict[str, List[IndexedOperation]] = {}

    def generate(self) -> Project:
        """Основная генерация"""
        self.project.add_file(build_transport_file())

        self.groups = index_by_tag(self.openapi_dict)
        for tag, operations in self.groups.items():
            self._generate_tag_module(tag, operations)

        self.project.add_file(build_barrel(self.plan))
        return self.project

    def _generate_tag_module(self, tag: str, operations: List[IndexedOperation]):
        entry = self.plan.register(tag, operation_count=len(operations))
        logger.debug(f"Тег {tag!r} -> {entry.file_name} ({entry.class_name})")

        self.project.add_file(
            build_api_module(
                tag,
                operations,
                class_name=entry.class_name,
                file_name=entry.file_name,
                encode_path_params=self.encode_path_params,
            )
        )
