"""Генератор aiohttp клиентов из OpenAPI спецификаций, сгруппированных по тегам"""

from .exceptions import (
    ConfigError,
    FetchFailure,
    GenerationError,
    HttpStatusFailure,
    ParseFailure,
    TooManyRedirects,
    WriteFailure,
)
from .generator import ApiClientGenerator, generate, generate_client, write_project

__all__ = [
    "ApiClientGenerator",
    "generate",
    "generate_client",
    "write_project",
    "GenerationError",
    "ConfigError",
    "FetchFailure",
    "TooManyRedirects",
    "HttpStatusFailure",
    "ParseFailure",
    "WriteFailure",
]
