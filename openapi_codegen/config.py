"""
Конфигурация для генерации API клиента
"""

import os
from dataclasses import asdict, dataclass
from typing import Optional

import toml

from .exceptions import ConfigError
from .internal.parser.loader import DEFAULT_MAX_REDIRECTS

CONFIG_FILE = "openapi.toml"
DEFAULT_SPEC_URL = "http://localhost:8000/openapi.json"
DEFAULT_DIRNAME = "api_client"
SPEC_URL_ENV = "SPEC_URL"


@dataclass
class OpenApiConfig:
    """Конфигурация генератора OpenAPI клиента"""

    url: Optional[str] = None
    dirname: Optional[str] = None
    encode_path_params: bool = False
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    timeout: Optional[float] = None

    @classmethod
    def from_file(
        cls, config_path: str = CONFIG_FILE, search_dir: Optional[str] = None
    ) -> Optional["OpenApiConfig"]:
        """Загрузка конфигурации из файла; None, если файла нет"""
        # Если указана директория для поиска, ищем конфиг там
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, CONFIG_FILE)
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
        except (OSError, toml.TomlDecodeError) as exc:
            raise ConfigError(f"Не удалось прочитать {config_path}: {exc}") from exc

        try:
            return cls(
                url=config_data.get("url"),
                dirname=config_data.get("dirname", DEFAULT_DIRNAME),
                encode_path_params=bool(config_data.get("encode_path_params", False)),
                max_redirects=int(config_data.get("max_redirects", DEFAULT_MAX_REDIRECTS)),
                timeout=(
                    float(config_data["timeout"])
                    if config_data.get("timeout") is not None
                    else None
                ),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Некорректное значение в {config_path}: {exc}") from exc

    def save_to_file(self, config_path: str = CONFIG_FILE) -> None:
        """Сохранение конфигурации в файл"""
        # toml не умеет None
        config_data = {k: v for k, v in asdict(self).items() if v is not None}

        with open(config_path, "w", encoding="utf-8") as f:
            toml.dump(config_data, f)

    def merge_with_args(self, args) -> "OpenApiConfig":
        """Объединение с аргументами командной строки"""
        return OpenApiConfig(
            url=getattr(args, "url", None) or self.url,
            dirname=getattr(args, "dirname", None) or self.dirname,
            encode_path_params=getattr(args, "encode_path_params", False)
            or self.encode_path_params,
            max_redirects=(
                args.max_redirects
                if getattr(args, "max_redirects", None) is not None
                else self.max_redirects
            ),
            timeout=(
                args.timeout if getattr(args, "timeout", None) is not None else self.timeout
            ),
        )

    def resolve_url(self, cli_url: Optional[str] = None) -> str:
        """Аргумент командной строки -> SPEC_URL -> openapi.toml -> значение по умолчанию"""
        return cli_url or os.environ.get(SPEC_URL_ENV) or self.url or DEFAULT_SPEC_URL

    def resolve_dirname(self) -> str:
        return self.dirname or DEFAULT_DIRNAME
