import re
import textwrap
from typing import List, Optional, Union

from pydantic import BaseModel, field_validator

INDENT = "    "
MAX_LINE_LENGTH = 88

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


def _indent(text: str) -> str:
    return textwrap.indent(text, INDENT)


def escape_control_chars(text: str) -> str:
    """Управляющие символы, кроме переноса строки и табуляции, в виде \\xNN"""
    return _CONTROL_CHARS.sub(lambda m: f"\\x{ord(m.group()):02x}", text)


def _docstring(text: str) -> str:
    """Docstring в стиле генератора: кавычки на отдельных строках"""
    escaped = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    escaped = escape_control_chars(escaped)
    return '"""\n' + escaped.strip("\n") + '\n"""'


class Variable(BaseModel):
    """Выражение типа: Variable(value=["str", "Any"], wrap_name="Dict") -> Dict[str, Any]"""

    value: list[Union["Variable", str]] = []
    wrap_name: Optional[str] = None

    @field_validator("value", mode="before")
    def value_check(cls, value):
        if not isinstance(value, list):
            return [value]
        return value

    def __str__(self):
        inner = ", ".join(str(v) for v in self.value)
        if self.wrap_name is None:
            return inner
        return f"{self.wrap_name}[{inner}]" if inner else self.wrap_name


class Parameter(BaseModel):
    name: str

    default: Optional[str] = None
    var_type: Optional[Variable] = None

    def __str__(self):
        if self.var_type is None:
            return self.name + (f"={self.default}" if self.default is not None else "")
        return (
            f"{self.name}: {self.var_type}"
            + (f" = {self.default}" if self.default is not None else "")
        )


class CodeBlock(BaseModel):
    order: int = 0
    code: str = "pass"

    def __str__(self):
        return self.code.replace("\t", INDENT)


class Function(BaseModel):
    name: str
    parameters: list[Parameter] = []
    response: Optional[str] = None

    async_def: bool = False
    description: Optional[str] = None

    code: CodeBlock = CodeBlock(code="pass")

    def signature(self) -> str:
        # параметры со значением по умолчанию всегда после обязательных
        parameters = sorted(self.parameters, key=lambda p: p.default is not None)
        prefix = f"{'async ' if self.async_def else ''}def {self.name}("
        suffix = ")" + (f" -> {self.response}" if self.response else "") + ":"

        one_line = prefix + ", ".join(map(str, parameters)) + suffix
        if len(one_line) <= MAX_LINE_LENGTH or len(parameters) < 2:
            return one_line

        return prefix + "\n" + "".join(_indent(f"{p},\n") for p in parameters) + suffix

    def __str__(self) -> str:
        body = []
        if self.description:
            body.append(_docstring(self.description))
        body.append(str(self.code))

        return self.signature() + "\n" + _indent("\n".join(body))


class Class(BaseModel):
    name: str
    functions: dict[str, Function] = {}

    order: int = 0

    def __str__(self) -> str:
        members = "\n\n".join(str(f) for f in self.functions.values())
        return f"class {self.name}:\n" + _indent(members or "pass")

    def add_function(self, function: Union[Function, str], **kwargs) -> Function:
        """Добавление метода; одноименный метод заменяется, как и в самом Python"""
        if isinstance(function, str):
            function = Function(name=function, **kwargs)

        self.functions[function.name] = function
        return function


class CodeFile(BaseModel):
    file_name: str

    header: list[str] = []
    imports: list[str] = []
    classes: dict[str, Class] = {}
    code_blocks: list[CodeBlock] = []

    def __str__(self):
        sections = []
        if self.header:
            sections.append("\n".join(self.header))
        if self.imports:
            sections.append("\n".join(self.imports))

        members = sorted(
            self.code_blocks + list(self.classes.values()),
            key=lambda x: x.order,
        )
        text = "\n\n".join(sections)
        if members:
            body = "\n\n\n".join(str(m).strip("\n") for m in members)
            text = text + "\n\n\n" + body if text else body

        return text + "\n"

    def add_class(self, cls: Union[Class, str], **kwargs) -> Class:
        if isinstance(cls, str):
            cls = Class(name=cls, **kwargs)

        self.classes[cls.name] = cls
        return cls

    def add_code_block(self, code_block: Union[CodeBlock, str], **kwargs) -> "CodeFile":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block, **kwargs)

        self.code_blocks.append(code_block)
        return self


class Project(BaseModel):
    name: str
    files: list[CodeFile] = []

    def add_file(self, file_name: Union[CodeFile, str], **kwargs) -> CodeFile:
        code_file = file_name
        if isinstance(file_name, str):
            code_file = CodeFile(file_name=file_name, **kwargs)

        self.files.append(code_file)
        return code_file

    def get_file(self, file_name: str) -> Optional[CodeFile]:
        for code_file in self.files:
            if code_file.file_name == file_name:
                return code_file
        return None

    @property
    def file_names(self) -> List[str]:
        return [f.file_name for f in self.files]
