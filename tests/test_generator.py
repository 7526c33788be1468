"""
Тесты для генерации кода клиента
"""

import inspect

import pytest

from openapi_codegen.generator import ApiClientGenerator, generate_client
from openapi_codegen.internal.generator.client_generator import (
    path_expression,
    render_api_module,
    render_barrel,
    render_transport_helper,
)
from openapi_codegen.internal.parser.openapi import index_by_tag
from openapi_codegen.internal.types.emission_plan import EmissionPlan
from openapi_codegen.internal.types.models import Class, CodeBlock, CodeFile

EXPECTED_DEFAULT_MODULE = '''# Auto-generated API for tag: default

from typing import Any, Dict, Optional

from .common import HttpClient


class DefaultApi:
    def __init__(self, http: HttpClient) -> None:
        self._http = http

    async def get_health(self) -> Any:
        """
        Health check

        GET /health
        """
        return await self._http.request(
            path='/health',
            method='GET',
        )


__all__ = ['DefaultApi']
'''


def _sources(project):
    return {code_file.file_name: str(code_file) for code_file in project.files}


def _arg_names(method):
    return list(inspect.signature(method).parameters)


class TestProjectLayout:
    """Тесты набора файлов"""

    def test_file_order(self, shop_spec):
        """common.py первым, __init__.py последним, модули тегов между ними"""
        project = generate_client(shop_spec)

        assert project.file_names == [
            "common.py",
            "users_api.py",
            "orders_api.py",
            "default_api.py",
            "__init__.py",
        ]

    def test_empty_spec_still_has_transport_and_barrel(self):
        project = generate_client({"openapi": "3.0.0", "paths": {}})

        assert project.file_names == ["common.py", "__init__.py"]
        assert "__all__ = [*_common_all]" in str(project.get_file("__init__.py"))

    def test_all_sources_compile(self, shop_spec):
        for name, source in _sources(generate_client(shop_spec)).items():
            compile(source, name, "exec")

    def test_idempotent(self, shop_spec):
        """Одинаковый вход дает побайтно одинаковый выход"""
        first = _sources(generate_client(shop_spec))
        second = _sources(ApiClientGenerator(shop_spec).generate())

        assert first == second

    def test_transport_is_input_independent(self, shop_spec):
        project = generate_client(shop_spec)

        assert str(project.get_file("common.py")) == render_transport_helper()
        assert render_transport_helper() == render_transport_helper()


class TestApiModule:
    """Тесты модуля одного тега"""

    def test_exact_render(self, shop_spec):
        operations = index_by_tag(shop_spec)["default"][:1]

        assert render_api_module("default", operations) == EXPECTED_DEFAULT_MODULE

    def test_header_and_class(self, shop_spec):
        source = render_api_module("users", index_by_tag(shop_spec)["users"])

        assert source.startswith("# Auto-generated API for tag: users\n")
        assert "from .common import HttpClient" in source
        assert "class UsersApi:" in source
        assert "__all__ = ['UsersApi']" in source
        assert "quote" not in source

    def test_summary_and_route_in_docstring(self, shop_spec):
        source = render_api_module("users", index_by_tag(shop_spec)["users"])

        assert "List users" in source
        assert "GET /users/{id}/orders/{orderId}" in source

    def test_awkward_summary_compiles(self):
        spec = {"paths": {"/a": {"get": {"summary": 'Say """hi""" \\ bye'}}}}
        source = render_api_module("default", index_by_tag(spec)["default"])

        compile(source, "default_api.py", "exec")

    def test_control_characters_escaped(self, import_client):
        """NUL и другие управляющие символы в summary и теге не ломают модуль"""
        spec = {"paths": {"/a": {"get": {"summary": "x\x00y\rz", "tags": ["t\x00g"]}}}}
        source = render_api_module("t\x00g", index_by_tag(spec)["t\x00g"])

        compile(source, "t_g_api.py", "exec")
        assert "\x00" not in source
        assert "x\\x00y\\x0dz" in source
        assert "# Auto-generated API for tag: t\\x00g" in source

        client = import_client(spec)
        assert "x\x00y\rz" in client.T_gApi.get_a.__doc__

    def test_tabs_in_summary_kept(self):
        """Табуляция заменяется пробелами только в коде, не в тексте docstring"""
        spec = {"paths": {"/a": {"get": {"summary": "a\tb"}}}}
        source = render_api_module("default", index_by_tag(spec)["default"])

        assert "a\tb" in source
        assert "\n        return await self._http.request(\n            path='/a'," in source
        compile(source, "default_api.py", "exec")

    def test_duplicate_function_names_collapse(self):
        """Одноименные операции внутри тега: остается последняя"""
        spec = {
            "paths": {
                "/a": {"get": {"operationId": "same"}},
                "/b": {"post": {"operationId": "same"}},
            }
        }
        source = render_api_module("default", index_by_tag(spec)["default"])

        assert source.count("async def same(") == 1
        assert "POST /b" in source
        compile(source, "default_api.py", "exec")

    def test_encoded_mode_imports_quote(self, shop_spec):
        source = render_api_module(
            "users", index_by_tag(shop_spec)["users"], encode_path_params=True
        )

        assert "from urllib.parse import quote" in source
        assert "quote(str(path_params['id']), safe='')" in source


class TestPathExpression:
    """Тесты подстановки path параметров"""

    def test_raw(self):
        assert path_expression("/users/{id}/orders/{orderId}") == (
            "'/users/' + str(path_params['id']) + '/orders/' + str(path_params['orderId'])"
        )

    def test_encoded(self):
        assert path_expression("/users/{id}", encode=True) == (
            "'/users/' + quote(str(path_params['id']), safe='')"
        )

    def test_no_placeholders(self):
        assert path_expression("/health") == "'/health'"
        assert path_expression("") == "''"

    def test_undeclared_placeholder_stays_literal(self):
        assert path_expression("/users/{id}/{extra}", names=["id"]) == (
            "'/users/' + str(path_params['id']) + '/' + '{extra}'"
        )

    def test_quotes_in_path_are_escaped(self):
        expression = path_expression("/it's/{id}")

        assert eval(expression, {"path_params": {"id": 1}}) == "/it's/1"


class TestMethodSignatures:
    """Тесты аргументов сгенерированных методов"""

    @pytest.fixture
    def client(self, shop_spec, import_client):
        return import_client(shop_spec)

    def test_no_parameters(self, client):
        assert _arg_names(client.DefaultApi.get_health) == ["self"]
        assert _arg_names(client.DefaultApi.head_root) == ["self"]

    def test_query_only(self, client):
        assert _arg_names(client.UsersApi.search) == ["self", "query"]

    def test_query_and_headers(self, client):
        assert _arg_names(client.UsersApi.listUsers) == ["self", "query", "headers"]

    def test_body_only(self, client):
        assert _arg_names(client.UsersApi.createUser) == ["self", "body"]

    def test_all_four(self, client):
        signature = inspect.signature(client.UsersApi.updateUser)

        assert list(signature.parameters) == ["self", "path_params", "query", "headers", "body"]
        assert signature.parameters["path_params"].default is inspect.Parameter.empty
        for name in ("query", "headers", "body"):
            assert signature.parameters[name].default is None

    def test_methods_are_async(self, client):
        assert inspect.iscoroutinefunction(client.UsersApi.get_users_orders)
        assert inspect.iscoroutinefunction(client.OrdersApi.get_users_orders)


class TestBarrel:
    """Тесты __init__.py"""

    def test_reexports(self, shop_spec, import_client):
        client = import_client(shop_spec)

        assert set(client.__all__) == {
            "UsersApi",
            "OrdersApi",
            "DefaultApi",
            "HttpClient",
            "RequestFailure",
        }

    def test_imports_follow_plan(self):
        plan = EmissionPlan()
        plan.register("users")
        plan.register("orders")
        source = render_barrel(plan)

        assert "from .users_api import UsersApi" in source
        assert "from .orders_api import OrdersApi" in source
        assert "from .common import *" in source
        assert source.index("users_api") < source.index("orders_api")


class TestEmissionPlan:
    """Тесты разрешения коллизий имен"""

    def test_case_collision_gets_suffix(self):
        plan = EmissionPlan()
        first = plan.register("Users")
        second = plan.register("users")

        assert (first.file_name, first.class_name) == ("users_api.py", "UsersApi")
        assert (second.file_name, second.class_name) == ("users_2_api.py", "Users2Api")

    def test_register_is_stable(self):
        plan = EmissionPlan()

        assert plan.register("pets") is plan.register("pets")
        assert len(plan) == 1 and "pets" in plan

    def test_sanitized_collision(self):
        plan = EmissionPlan()
        names = [plan.register(tag).module_name for tag in ("a-b", "a b", "a.b")]

        assert names == ["a_b_api", "a_b_2_api", "a_b_3_api"]

    def test_colliding_tags_import(self, import_client):
        spec = {
            "paths": {
                "/a": {"get": {"tags": ["Users"]}},
                "/b": {"get": {"tags": ["users"]}},
            }
        }
        client = import_client(spec)

        assert inspect.iscoroutinefunction(client.UsersApi.get_a)
        assert inspect.iscoroutinefunction(client.Users2Api.get_b)


class TestCodeModel:
    """Тесты рендеринга модели кода"""

    def test_empty_class(self):
        assert str(Class(name="Empty")) == "class Empty:\n    pass"

    def test_members_ordered(self):
        code_file = CodeFile(file_name="m.py", header=["# h"])
        code_file.add_code_block(CodeBlock(code="__all__ = ['A']", order=1))
        code_file.add_class("A")

        assert str(code_file) == "# h\n\n\nclass A:\n    pass\n\n\n__all__ = ['A']\n"

    def test_tabs_replaced_only_in_code(self):
        code_file = CodeFile(file_name="m.py", header=["# a\tb"])
        code_file.add_code_block(CodeBlock(code="if x:\n\treturn 1"))

        assert str(code_file) == "# a\tb\n\n\nif x:\n    return 1\n"
