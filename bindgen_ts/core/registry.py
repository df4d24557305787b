"""
bindgen-ts Export Registry

The @command and @entity decorators mark backend functions and data
structures for binding generation. Marking only records the object; the
descriptors are extracted later, when a generation run asks for them.
"""

import inspect
import logging
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import AliasChoices, BaseModel, TypeAdapter

from bindgen_ts.core.type_registry import TypeRegistry, default_registry


logger = logging.getLogger(__name__)


@dataclass
class ExportedCommand:
    """Function marked with @command."""
    func: Callable
    out_dir: Optional[str] = None
    skip: List[str] = field(default_factory=list)
    include: Optional[List[str]] = None    # Restrict to these parameters (route sources)

    @property
    def name(self) -> str:
        return self.func.__name__


@dataclass
class ExportedEntity:
    """Model or dataclass marked with @entity."""
    cls: type
    out_dir: Optional[str] = None

    @property
    def name(self) -> str:
        return self.cls.__name__


class ExportRegistry:
    """Commands and entities collected from decorated source objects."""

    def __init__(self, types: Optional[TypeRegistry] = None):
        self.types = types if types is not None else default_registry
        self.commands: Dict[str, ExportedCommand] = {}
        self.entities: Dict[str, ExportedEntity] = {}

    def add_command(self, exported: ExportedCommand):
        self._warn_on_collision(self.commands.get(exported.name), exported.func, "command")
        self.commands[exported.name] = exported

    def add_entity(self, exported: ExportedEntity):
        self._warn_on_collision(self.entities.get(exported.name), exported.cls, "entity")
        self.entities[exported.name] = exported
        self.types.register_entity(exported.cls)

    def clear(self):
        for exported in self.entities.values():
            self.types.unregister_entity(exported.cls)
        self.commands.clear()
        self.entities.clear()

    def _warn_on_collision(self, previous, obj: Any, kind: str):
        if previous is None:
            return
        previous_obj = previous.func if kind == "command" else previous.cls
        if previous_obj is not obj:
            logger.warning(
                f"{kind} '{obj.__name__}' from {obj.__module__} replaces the one from "
                f"{previous_obj.__module__}; both would write the same file"
            )


default_exports = ExportRegistry()


def command(
    arg: Any = None,
    *,
    out: Optional[str] = None,
    skip: Sequence[str] = (),
    registry: Optional[ExportRegistry] = None,
):
    """
    Mark a function as a backend command with a generated TypeScript wrapper.

    Usable bare (``@command``), with a directory (``@command("./custom")``)
    or with keywords (``@command(out="./custom", skip=["app"])``). Parameters
    named in ``skip`` are supplied by the backend and left out of the binding.
    The function itself is returned unchanged.
    """
    target_registry = registry if registry is not None else default_exports

    def decorate(func: Callable, out_dir: Optional[str]) -> Callable:
        if not inspect.isfunction(func):
            raise TypeError(f"@command should be used on a function, got {func!r}")
        exported = ExportedCommand(func=func, out_dir=out_dir, skip=list(skip))
        target_registry.add_command(exported)
        func.__bindgen_command__ = exported
        return func

    if callable(arg):
        return decorate(arg, out)

    return lambda func: decorate(func, arg if arg is not None else out)


def entity(
    arg: Any = None,
    *,
    out: Optional[str] = None,
    registry: Optional[ExportRegistry] = None,
):
    """
    Mark a Pydantic model or dataclass as an exported data structure.

    The class gets a TypeScript interface of its own and becomes usable as a
    command parameter type. Dataclasses are given a Pydantic TypeAdapter so
    values serialize the same way models do.
    Model fields whose serialized name would not validate back are rejected
    with a TypeError.
    """
    target_registry = registry if registry is not None else default_exports

    def decorate(cls: type, out_dir: Optional[str]) -> type:
        if not inspect.isclass(cls):
            raise TypeError(f"@entity should be used on a class, got {cls!r}")
        if issubclass(cls, BaseModel):
            _check_alias_round_trip(cls)
        elif dataclasses.is_dataclass(cls):
            cls.__bindgen_adapter__ = TypeAdapter(cls)
        else:
            raise TypeError(f"@entity requires a pydantic BaseModel or a dataclass, got {cls.__name__}")

        exported = ExportedEntity(cls=cls, out_dir=out_dir)
        target_registry.add_entity(exported)
        cls.__bindgen_entity__ = exported
        return cls

    if inspect.isclass(arg):
        return decorate(arg, out)

    return lambda cls: decorate(cls, arg if arg is not None else out)


def dump_entity(value: Any) -> Any:
    """Serialize an entity instance to JSON-compatible data."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    adapter = getattr(type(value), "__bindgen_adapter__", None)
    if adapter is None:
        raise TypeError(f"{type(value).__name__} is not an exported entity")
    return adapter.dump_python(value, mode="json", by_alias=True)


def load_entity(cls: type, data: Any) -> Any:
    """Validate JSON-compatible data back into an entity instance."""
    if issubclass(cls, BaseModel):
        return cls.model_validate(data)
    adapter = getattr(cls, "__bindgen_adapter__", None)
    if adapter is None:
        raise TypeError(f"{cls.__name__} is not an exported entity")
    return adapter.validate_python(data)


def _check_alias_round_trip(model: type):
    """
    Every serialized field name must also be accepted on validation.

    A field with only ``serialization_alias`` would be dumped as e.g.
    ``createdAt`` but rejected when the same data comes back.
    """
    by_name = bool(model.model_config.get("populate_by_name") or model.model_config.get("validate_by_name"))

    for field_name, field_info in model.model_fields.items():
        serialized_name = field_info.serialization_alias or field_info.alias or field_name
        accepted = _validation_names(field_name, field_info)
        if by_name:
            accepted.add(field_name)

        if serialized_name not in accepted:
            raise TypeError(
                f"@entity {model.__name__}: field '{field_name}' is serialized as '{serialized_name}' "
                f"but validated as {sorted(accepted)}; use alias='{serialized_name}' or add "
                f"validation_alias='{serialized_name}'"
            )


def _validation_names(field_name: str, field_info) -> set:
    validation_alias = field_info.validation_alias
    if validation_alias is None:
        return {field_info.alias or field_name}
    if isinstance(validation_alias, str):
        return {validation_alias}
    if isinstance(validation_alias, AliasChoices):
        return {choice for choice in validation_alias.choices if isinstance(choice, str)}
    return set()
