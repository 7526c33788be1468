import argparse
import logging
import sys
from typing import List, Optional

from openapi_codegen.config import CONFIG_FILE, OpenApiConfig
from openapi_codegen.exceptions import EXIT_SUCCESS, GenerationError
from openapi_codegen.generator import generate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="openapi-codegen",
        description="Генерация aiohttp клиента из OpenAPI: common.py, модуль на тег и __init__.py",
    )
    parser.add_argument(
        "url",
        nargs="?",
        help="URL или путь к OpenAPI спецификации (иначе SPEC_URL, openapi.toml, значение по умолчанию)",
    )
    parser.add_argument("--dirname", type=str, help="Директория для генерации клиента")
    parser.add_argument(
        "--encode-path-params",
        action="store_true",
        default=None,
        help="Экранировать значения path параметров (quote) вместо подстановки как есть",
    )
    parser.add_argument(
        "--max-redirects", type=int, help="Максимальное число редиректов при загрузке"
    )
    parser.add_argument("--timeout", type=float, help="Таймаут загрузки спецификации, сек")
    parser.add_argument(
        "--init-config", action="store_true", help="Создать конфиг файл openapi.toml"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Отладочный вывод")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Генерация клиента; возвращает код выхода"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[gen] %(message)s",
    )

    try:
        file_config = OpenApiConfig.from_file(CONFIG_FILE) or OpenApiConfig()
        config = file_config.merge_with_args(args)

        if args.init_config:
            config.url = config.resolve_url(args.url)
            config.dirname = config.resolve_dirname()
            config.save_to_file(CONFIG_FILE)
            print(f"✅ Создан конфиг файл {CONFIG_FILE}")
            return EXIT_SUCCESS

        generate(
            config.resolve_url(args.url),
            config.resolve_dirname(),
            encode_path_params=config.encode_path_params,
            max_redirects=config.max_redirects,
            timeout=config.timeout,
        )
    except GenerationError as exc:
        print(f"❌ Ошибка генерации: {exc}", file=sys.stderr)
        return exc.exit_code
    except OSError as exc:
        print(f"❌ Ошибка: {exc}", file=sys.stderr)
        return 1

    return EXIT_SUCCESS


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
