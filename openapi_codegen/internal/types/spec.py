"""Модели входной OpenAPI спецификации (только то, что нужно генератору)"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.naming import unique_param_names

PARAMETER_LOCATIONS = ("path", "query", "header", "cookie")


class OpenApiParameter(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    location: Optional[str] = Field(default=None, alias="in")

    @field_validator("name", "location", mode="before")
    def text_check(cls, value):
        if value is None or isinstance(value, str):
            return value
        return None


class OpenApiOperation(BaseModel):
    """Операция OpenAPI: один HTTP метод на одном пути"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    operation_id: Optional[str] = Field(default=None, alias="operationId")
    tags: List[str] = []
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: List[OpenApiParameter] = []
    request_body: Optional[Any] = Field(default=None, alias="requestBody")

    @field_validator("operation_id", "summary", "description", mode="before")
    def text_check(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("tags", mode="before")
    def tags_check(cls, value):
        if not isinstance(value, list):
            return []
        return [str(tag) for tag in value if tag is not None]

    @field_validator("parameters", mode="before")
    def parameters_check(cls, value):
        # $ref и прочие не-объекты остаются без имени и дальше игнорируются
        if not isinstance(value, list):
            return []
        return [p if isinstance(p, dict) else {} for p in value]

    def param_names(self, location: str) -> List[str]:
        """Уникальные имена параметров одного расположения (path/query/header)"""
        return unique_param_names(p for p in self.parameters if p.location == location)

    @property
    def has_body(self) -> bool:
        return self.request_body is not None


class IndexedOperation(OpenApiOperation):
    """Операция, привязанная к тегу: добавлены метод, путь и имя функции"""

    method: str
    path_key: str = Field(alias="pathKey")
    fn_name: str = Field(alias="fnName")

    @property
    def path_params(self) -> List[str]:
        return self.param_names("path")

    @property
    def query_params(self) -> List[str]:
        return self.param_names("query")

    @property
    def header_params(self) -> List[str]:
        return self.param_names("header")
