"""
Introspection tests for command functions, entities and FastAPI routes
"""

from dataclasses import dataclass
from typing import Optional

import pytest
from fastapi import BackgroundTasks, FastAPI, Request
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from bindgen_ts.core.errors import UnresolvableTypeError, UnsupportedShapeError
from bindgen_ts.core.registry import command, dump_entity, entity, load_entity
from bindgen_ts.introspection import commands_from_app, function_to_descriptor, model_to_descriptor
from bindgen_ts.core.integrator import generate_only


# === FUNCTIONS === #

def test_function_descriptor_from_signature():
    def add(a: int, b: float) -> float:
        """Add two numbers."""
        return a + b

    descriptor = function_to_descriptor(add, out_dir="./custom")

    assert descriptor.name == "add"
    assert [(p.name, p.annotation) for p in descriptor.parameters] == [("a", int), ("b", float)]
    assert descriptor.out_dir == "./custom"
    assert descriptor.docstring == "Add two numbers."


def test_string_annotations_are_resolved():
    def greet(name: "str"):
        return name

    assert function_to_descriptor(greet).parameters[0].annotation is str


def test_skip_drops_injected_parameters():
    def save(app_handle: object, title: str):
        return title

    descriptor = function_to_descriptor(save, skip=["app_handle"])

    assert descriptor.parameter_names == ["title"]


@pytest.mark.parametrize("func, member, shape", [
    (lambda *values: None, "values", "*args"),
    (lambda **options: None, "options", "**kwargs"),
])
def test_variadic_parameters_are_rejected(func, member, shape):
    with pytest.raises(UnsupportedShapeError) as exc_info:
        function_to_descriptor(func)

    assert exc_info.value.member == member
    assert shape in str(exc_info.value)


def test_default_values_are_rejected():
    def search(query: str, limit: int = 10):
        return query

    with pytest.raises(UnsupportedShapeError, match="default values are not supported"):
        function_to_descriptor(search)


def test_missing_annotation_is_rejected():
    def log(message):
        return message

    with pytest.raises(UnsupportedShapeError, match="missing type annotation"):
        function_to_descriptor(log)


def test_unknown_forward_reference_is_unresolvable():
    def load(item: "DoesNotExist"):  # noqa: F821
        return item

    with pytest.raises(UnresolvableTypeError, match="'load'"):
        function_to_descriptor(load)


# === ENTITIES === #

def test_pydantic_model_descriptor_uses_serialized_names():
    class Account(BaseModel):
        """Login account."""
        account_id: int = Field(alias="accountId")
        email: str = Field(description="Primary address")

    structure = model_to_descriptor(Account)

    assert structure.name == "Account"
    assert structure.field_names == ["accountId", "email"]
    assert structure.fields[1].description == "Primary address"
    assert structure.docstring == "Login account."


def test_dataclass_descriptor():
    @dataclass
    class Point:
        x: float
        y: float

    structure = model_to_descriptor(Point)

    assert [(f.name, f.annotation) for f in structure.fields] == [("x", float), ("y", float)]
    assert structure.docstring is None


def test_model_descriptor_rejects_plain_classes():
    class Plain:
        x: int

    with pytest.raises(TypeError):
        model_to_descriptor(Plain)


def test_entity_decorator_registers_type(exports):
    @entity(registry=exports)
    class Profile(BaseModel):
        bio: str

    assert exports.entities["Profile"].cls is Profile
    assert exports.types.resolve(Profile) == "Profile"


def test_clear_forgets_entity_types(exports):
    @entity(registry=exports)
    class Profile(BaseModel):
        bio: str

    exports.clear()

    assert not exports.types.is_entity_name("Profile")
    assert Profile not in exports.types
    assert "Profile" not in exports.types
    assert exports.types.resolve(str) == "string"


def test_entity_decorator_with_directory(exports):
    @entity("'./models'", registry=exports)
    class Tag(BaseModel):
        label: str

    assert exports.entities["Tag"].out_dir == "'./models'"


def test_entity_decorator_rejects_plain_classes(exports):
    with pytest.raises(TypeError, match="BaseModel or a dataclass"):
        @entity(registry=exports)
        class Plain:
            x: int


def test_dataclass_entity_round_trips(exports):
    @entity(registry=exports)
    @dataclass
    class Size:
        width: int
        height: int

    data = dump_entity(Size(width=3, height=4))

    assert data == {"width": 3, "height": 4}
    assert load_entity(Size, data) == Size(width=3, height=4)


def test_model_entity_round_trips_by_alias(exports):
    @entity(registry=exports)
    class Session(BaseModel):
        session_id: str = Field(alias="sessionId")

    data = dump_entity(Session(sessionId="abc"))

    assert data == {"sessionId": "abc"}
    assert load_entity(Session, data).session_id == "abc"


def test_serialization_only_alias_is_rejected(exports):
    with pytest.raises(TypeError, match="'created_at' is serialized as 'createdAt'"):
        @entity(registry=exports)
        class Event(BaseModel):
            created_at: str = Field(serialization_alias="createdAt")

    assert "Event" not in exports.entities


@pytest.mark.parametrize("field", [
    Field(serialization_alias="createdAt", validation_alias="createdAt"),
    Field(serialization_alias="createdAt", validation_alias=AliasChoices("createdAt", "created_at")),
])
def test_matching_validation_alias_round_trips(exports, field):
    @entity(registry=exports)
    class Event(BaseModel):
        created_at: str = field

    data = dump_entity(Event(createdAt="2024-01-01"))

    assert data == {"createdAt": "2024-01-01"}
    assert load_entity(Event, data).created_at == "2024-01-01"
    assert model_to_descriptor(Event).field_names == ["createdAt"]


def test_populate_by_name_accepts_serialized_field_name(exports):
    @entity(registry=exports)
    class Event(BaseModel):
        model_config = ConfigDict(populate_by_name=True)

        created_at: str = Field(validation_alias="created")

    data = dump_entity(Event(created="x"))

    assert data == {"created_at": "x"}
    assert load_entity(Event, data).created_at == "x"


# === COMMANDS === #

def test_command_decorator_forms(exports):
    @command(registry=exports)
    def bare(x: int):
        return x

    @command("./custom", registry=exports)
    def positional(x: int):
        return x

    @command(out="./kw", skip=["app"], registry=exports)
    def keywords(app: object, x: int):
        return x

    assert exports.commands["bare"].out_dir is None
    assert exports.commands["positional"].out_dir == "./custom"
    assert exports.commands["keywords"].out_dir == "./kw"
    assert exports.commands["keywords"].skip == ["app"]
    assert keywords(None, 2) == 2


def test_command_decorator_rejects_classes(exports):
    with pytest.raises(TypeError, match="should be used on a function"):
        @command(registry=exports)
        class NotAFunction:
            pass


def test_generate_only_renders_every_export(exports, tmp_path):
    @entity(registry=exports)
    class Item(BaseModel):
        name: str

    @command(registry=exports)
    def add_item(item: Item, quantity: int):
        return item

    @command(registry=exports)
    def broken(values: Optional[int]):
        return values

    report = generate_only(exports=exports, out=str(tmp_path))

    rendered = {generated.entity: generated for generated in report.written}
    assert set(rendered) == {"Item", "add_item"}
    assert 'import type { Item } from "./Item";' in rendered["add_item"].content
    assert [failure.entity for failure in report.failures] == ["broken"]
    assert not report.ok
    assert not any(tmp_path.iterdir())


# === FASTAPI ROUTES === #

class NewUser(BaseModel):
    name: str


def _build_app() -> FastAPI:
    app = FastAPI()

    @app.get("/users/{user_id}")
    def get_user(user_id: int, request: Request, verbose: bool):
        return {"user_id": user_id}

    @app.post("/users")
    def create_user(user: NewUser, background_tasks: BackgroundTasks):
        return user

    return app


def test_commands_from_app_keep_client_parameters():
    app = _build_app()

    commands = commands_from_app(app)

    assert [c.name for c in commands] == ["get_user", "create_user"]

    get_user = function_to_descriptor(commands[0].func, include=commands[0].include)
    assert get_user.parameter_names == ["user_id", "verbose"]

    create_user = function_to_descriptor(commands[1].func, include=commands[1].include)
    assert create_user.parameter_names == ["user"]


def test_route_named_after_reserved_word_is_rejected():
    app = FastAPI()

    @app.delete("/items/{item_id}")
    def delete(item_id: int):
        return {"deleted": item_id}

    [exported] = commands_from_app(app)

    with pytest.raises(UnsupportedShapeError, match="TypeScript reserved word"):
        function_to_descriptor(exported.func, include=exported.include)
