from dataclasses import dataclass
from typing import Dict, Iterator

from ..utils.naming import tag_class_name, tag_module_name


@dataclass(frozen=True)
class EmissionEntry:
    """Куда и под каким именем попадает тег"""

    tag: str
    module_name: str
    class_name: str
    operation_count: int = 0

    @property
    def file_name(self) -> str:
        return f"{self.module_name}.py"


class EmissionPlan:
    """
    Реестр тег -> {модуль, класс}.

    Имена выводятся из тега детерминированно. Если два разных тега дают
    одинаковое имя файла или класса (``Users`` и ``users``), более поздний
    получает числовой суффикс, так что соответствие остается взаимно
    однозначным, а импорты в ``__init__.py`` совпадают с файлами.
    """

    def __init__(self):
        self._entries: Dict[str, EmissionEntry] = {}
        self._modules = set()
        self._classes = set()

    def register(self, tag: str, operation_count: int = 0) -> EmissionEntry:
        if tag in self._entries:
            return self._entries[tag]

        module_stem = tag_module_name(tag, suffix="")
        class_stem = tag_class_name(tag, suffix="")
        module_name, class_name = f"{module_stem}_api", f"{class_stem}Api"

        counter = 2
        while module_name in self._modules or class_name in self._classes:
            module_name = f"{module_stem}_{counter}_api"
            class_name = f"{class_stem}{counter}Api"
            counter += 1

        entry = EmissionEntry(
            tag=tag,
            module_name=module_name,
            class_name=class_name,
            operation_count=operation_count,
        )
        self._entries[tag] = entry
        self._modules.add(module_name)
        self._classes.add(class_name)
        return entry

    def __iter__(self) -> Iterator[EmissionEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, tag: str) -> bool:
        return tag in self._entries
