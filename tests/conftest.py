"""
Общие фикстуры: тестовая спецификация и импорт сгенерированного клиента
"""

import copy
import importlib
import sys
import uuid

import pytest

from openapi_codegen.generator import generate_client, write_project

SHOP_SPEC = {
    "openapi": "3.0.0",
    "info": {"title": "Shop API", "version": "1.0.0"},
    "paths": {
        "/users": {
            # общие параметры пути генератор не учитывает
            "parameters": [{"name": "X-Trace", "in": "header"}],
            "get": {
                "operationId": "listUsers",
                "summary": "List users",
                "tags": ["users"],
                "parameters": [
                    {"name": "page", "in": "query"},
                    {"name": "tag", "in": "query"},
                    {"name": "page", "in": "header"},
                ],
            },
            "post": {
                "operationId": "createUser",
                "tags": ["users"],
                "requestBody": {
                    "content": {"application/json": {"schema": {"type": "object"}}}
                },
            },
        },
        "/users/search": {
            "get": {
                "operationId": "search",
                "tags": ["users"],
                "parameters": [{"name": "q", "in": "query"}],
            }
        },
        "/users/{id}": {
            "put": {
                "operationId": "updateUser",
                "tags": ["users"],
                "parameters": [
                    {"name": "id", "in": "path"},
                    {"name": "dryRun", "in": "query"},
                    {"name": "X-Request-Id", "in": "header"},
                ],
                "requestBody": {},
            }
        },
        "/users/{id}/orders/{orderId}": {
            "get": {
                "summary": "Get one order",
                "tags": ["users", "orders"],
                "parameters": [
                    {"name": "id", "in": "path"},
                    {"name": "orderId", "in": "path"},
                ],
            }
        },
        "/health": {"get": {"summary": "Health check"}},
        "/": {"head": {}},
    },
}


@pytest.fixture
def shop_spec():
    return copy.deepcopy(SHOP_SPEC)


@pytest.fixture
def import_client(tmp_path, monkeypatch):
    """Генерирует клиент во временный пакет и импортирует его"""
    monkeypatch.syspath_prepend(str(tmp_path))
    imported = []

    def _import(spec, **kwargs):
        package = f"generated_{uuid.uuid4().hex[:12]}"
        project = generate_client(spec, **kwargs)
        write_project(project, str(tmp_path / package))
        importlib.invalidate_caches()
        imported.append(package)
        return importlib.import_module(package)

    yield _import

    for package in imported:
        for name in list(sys.modules):
            if name == package or name.startswith(package + "."):
                del sys.modules[name]
