"""
bindgen-ts error taxonomy

Every failure during binding generation is scoped to one exported entity.
Emitters raise these and never catch them; the calling context decides
whether to halt the run or continue with the remaining entities.
"""

from typing import Optional


class BindgenError(Exception):
    """Base class for entity-scoped generation failures."""

    def __init__(self, message: str, entity: Optional[str] = None, member: Optional[str] = None):
        self.entity = entity
        self.member = member
        super().__init__(message)


class UnsupportedShapeError(BindgenError, TypeError):
    """A parameter or field is not a simple owned type."""

    @classmethod
    def for_member(cls, entity: str, member: str, shape: str) -> "UnsupportedShapeError":
        return cls(
            f"'{entity}': '{member}' has unsupported shape ({shape}). "
            f"Only simple owned types are supported, e.g. 'name: str' or 'user: User'.",
            entity=entity,
            member=member,
        )


class UnresolvableTypeError(BindgenError, LookupError):
    """A referenced type has no declared TypeScript equivalent."""

    @classmethod
    def for_member(cls, entity: str, member: str, type_name: str) -> "UnresolvableTypeError":
        return cls(
            f"'{entity}': type '{type_name}' of '{member}' has no TypeScript equivalent. "
            f"Mark it with @entity or add it with TypeRegistry.register().",
            entity=entity,
            member=member,
        )


class BindingWriteError(BindgenError, OSError):
    """Directory creation or file write failed."""

    def __init__(self, path: str, cause: OSError, entity: Optional[str] = None):
        self.path = path
        label = f"'{entity}': " if entity else ""
        super().__init__(f"{label}could not write {path}: {cause}", entity=entity)


class ConfigError(ValueError):
    """Invalid bindgen.config.json or CLI configuration."""
