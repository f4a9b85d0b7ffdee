"""
LOR Resource Type Registry - map type discriminators to implementations.

Items name their resource type by discriminator ("file", "link", ...). The
registry resolves that name to the ResourceType subclass handling it.

Usage:
    import lor
    from lor.types import ResourceType

    @lor.register_resource_type
    class AudioType(ResourceType):
        name = "audio"
        ...

    # Or register multiple at once
    lor.register_resource_types(AudioType, SlidesType)
"""

from typing import Callable

from loguru import logger

from .exceptions import UnknownResourceTypeError
from .types.base import ResourceType


class ResourceTypeRegistry:
    """
    Registry of ResourceType classes keyed by discriminator.

    Built-in types are registered on first lookup unless a type with the
    same name was registered before.
    """

    def __init__(self) -> None:
        self._types: dict[str, type[ResourceType]] = {}
        self._builtin_types_registered: bool = False

    def clear(self) -> None:
        """Clear all registered types. Useful for testing."""
        self._types.clear()
        self._builtin_types_registered = False
        logger.debug("Resource type registry cleared")

    def register(self, type_class: type[ResourceType]) -> type[ResourceType]:
        """
        Register a resource type class.

        Args:
            type_class: ResourceType subclass with a ``name`` discriminator

        Returns:
            The class (allows use as decorator)

        Raises:
            TypeError: If the class is not a ResourceType or lacks a name
        """
        if not (isinstance(type_class, type) and issubclass(type_class, ResourceType)):
            raise TypeError(f"{type_class!r} is not a ResourceType subclass")

        type_name = getattr(type_class, "name", None)
        if not type_name:
            raise TypeError(f"{type_class.__name__} must define a 'name' discriminator")

        if type_name in self._types and self._types[type_name] is not type_class:
            logger.warning(f"Resource type {type_name} already registered, overwriting")

        self._types[type_name] = type_class
        logger.debug(f"Registered resource type: {type_name} ({type_class.__name__})")
        return type_class

    def register_many(self, *type_classes: type[ResourceType]) -> None:
        for type_class in type_classes:
            self.register(type_class)

    def register_builtin_types(self) -> None:
        """Register file, link and video types. Called automatically on lookup."""
        if self._builtin_types_registered:
            return

        from .types import BUILTIN_TYPES

        for type_class in BUILTIN_TYPES:
            if type_class.name not in self._types:
                self.register(type_class)

        self._builtin_types_registered = True
        logger.debug(f"Registered {len(BUILTIN_TYPES)} built-in resource types")

    def get(self, type_name: str, include_builtin: bool = True) -> type[ResourceType]:
        """
        Resolve a discriminator.

        Raises:
            UnknownResourceTypeError: If nothing is registered under the name
        """
        types = self.get_types(include_builtin)
        try:
            return types[type_name]
        except KeyError:
            raise UnknownResourceTypeError(type_name, sorted(types)) from None

    def get_types(self, include_builtin: bool = True) -> dict[str, type[ResourceType]]:
        """All registered types, discriminator -> class."""
        if include_builtin:
            self.register_builtin_types()
        return self._types.copy()

    def names(self) -> list[str]:
        return sorted(self.get_types())


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

_type_registry = ResourceTypeRegistry()


def register_resource_type(
    type_class: type[ResourceType] | None = None,
) -> type[ResourceType] | Callable[[type[ResourceType]], type[ResourceType]]:
    """
    Register a resource type. Usable as ``@register_resource_type`` or
    ``@register_resource_type()`` or as a direct call.
    """
    def decorator(t: type[ResourceType]) -> type[ResourceType]:
        return _type_registry.register(t)

    if type_class is not None:
        return decorator(type_class)
    return decorator


def register_resource_types(*type_classes: type[ResourceType]) -> None:
    """Register multiple resource types at once."""
    _type_registry.register_many(*type_classes)


def get_type_registry() -> ResourceTypeRegistry:
    """Get the global resource type registry."""
    return _type_registry


def clear_type_registry() -> None:
    """Clear all type registrations. Useful for testing."""
    _type_registry.clear()
