"""
Загрузка OpenAPI спецификации по URL или из локального файла.

Редиректы обрабатываются вручную: каждый ``Location`` запрашивается заново,
длина цепочки ограничена ``max_redirects``. Тело ответа разбирается как JSON
и возвращается как есть, без валидации схемы.
"""

import json
import logging
import os
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import httpx

from ...exceptions import FetchFailure, HttpStatusFailure, ParseFailure, TooManyRedirects

logger = logging.getLogger(__name__)

DEFAULT_MAX_REDIRECTS = 10


def fetch_spec(
    url: str,
    *,
    max_redirects: int = DEFAULT_MAX_REDIRECTS,
    timeout: Optional[float] = None,
    client: Optional[httpx.Client] = None,
) -> Dict[str, Any]:
    """
    Загрузка спецификации.

    Args:
        url: http(s) URL или путь к локальному JSON файлу.
        max_redirects: максимальное число переходов по ``Location``.
        timeout: таймаут запроса в секундах, ``None`` - без ограничения.
        client: готовый ``httpx.Client`` (например, с ``MockTransport``).

    Raises:
        FetchFailure: сетевая ошибка или некорректный URL.
        TooManyRedirects: цепочка редиректов длиннее ``max_redirects``.
        HttpStatusFailure: статус ответа >= 400.
        ParseFailure: тело не является JSON-объектом.
    """
    if not url.startswith(("http://", "https://")) and os.path.isfile(url):
        return _load_from_file(url)

    if client is not None:
        return _fetch_json(client, url, max_redirects)

    with httpx.Client(timeout=timeout, follow_redirects=False) as own_client:
        return _fetch_json(own_client, url, max_redirects)


def _fetch_json(client: httpx.Client, url: str, max_redirects: int) -> Dict[str, Any]:
    redirects = 0
    while True:
        logger.debug(f"GET {url}")
        try:
            response = client.get(url, follow_redirects=False)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchFailure(f"Не удалось загрузить {url}: {exc}", url=url) from exc

        location = response.headers.get("location")
        if 300 <= response.status_code < 400 and location:
            redirects += 1
            if redirects > max_redirects:
                raise TooManyRedirects(url, max_redirects)
            url = urljoin(str(response.url), location)
            logger.debug(f"Redirect {response.status_code} -> {url}")
            continue

        if response.status_code >= 400:
            raise HttpStatusFailure(response.status_code, url)

        return parse_spec(response.text, source=url)


def _load_from_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as exc:
        raise FetchFailure(f"Не удалось прочитать {path}: {exc}", url=path) from exc

    return parse_spec(content, source=path)


def parse_spec(content: str, source: str = "") -> Dict[str, Any]:
    """Разбор тела спецификации; верхний уровень обязан быть объектом"""
    try:
        document = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ParseFailure(f"Некорректный JSON в {source or 'ответе'}: {exc}") from exc

    if not isinstance(document, dict):
        raise ParseFailure(
            f"Спецификация должна быть JSON-объектом, получено {type(document).__name__}"
        )

    return document
