"""
Иерархия исключений генератора.

Все ошибки генерации наследуются от :class:`GenerationError` и несут
``exit_code``, который CLI передает в ``sys.exit``::

    GenerationError      (exit 1)
    +-- ConfigError      (exit 2)
    +-- HttpStatusFailure (exit 5)
    +-- FetchFailure     (exit 6)
    |   +-- TooManyRedirects (exit 6)
    +-- ParseFailure     (exit 7)
    +-- WriteFailure     (exit 8)

``RequestFailure`` сюда не входит: это исключение сгенерированного клиента,
оно объявляется в шаблоне ``common.py``.
"""

from typing import Optional

EXIT_SUCCESS = 0
EXIT_GENERIC_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_HTTP_STATUS = 5
EXIT_FETCH_FAILURE = 6
EXIT_PARSE_FAILURE = 7
EXIT_WRITE_FAILURE = 8


class GenerationError(Exception):
    """Базовая ошибка генерации клиента"""

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(GenerationError):
    """Некорректный или нечитаемый openapi.toml"""

    exit_code = EXIT_CONFIG_ERROR


class FetchFailure(GenerationError):
    """Сетевая ошибка при загрузке спецификации"""

    exit_code = EXIT_FETCH_FAILURE

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class TooManyRedirects(FetchFailure):
    """Цепочка редиректов длиннее допустимой"""

    def __init__(self, url: str, max_redirects: int):
        super().__init__(
            f"Превышено число редиректов ({max_redirects}) при загрузке {url}",
            url=url,
        )
        self.max_redirects = max_redirects


class HttpStatusFailure(GenerationError):
    """Сервер вернул статус >= 400 при загрузке спецификации"""

    exit_code = EXIT_HTTP_STATUS

    def __init__(self, status_code: int, url: str):
        super().__init__(f"Не удалось загрузить спецификацию: HTTP {status_code} ({url})")
        self.status_code = status_code
        self.url = url


class ParseFailure(GenerationError):
    """Тело ответа не является JSON-объектом"""

    exit_code = EXIT_PARSE_FAILURE


class WriteFailure(GenerationError):
    """Ошибка файловой системы при записи сгенерированных файлов"""

    exit_code = EXIT_WRITE_FAILURE

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
