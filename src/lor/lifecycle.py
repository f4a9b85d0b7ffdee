"""
ItemLifecycle - route item create/update/delete to resource types.

The generic item record is handled by ItemStore; this coordinator only hands
the type-specific payload to the ResourceType named by the item's
discriminator and returns its result unchanged.

Every operation on an item id runs under a per-item lock spanning
"compute target paths -> move files -> write attribute rows", so two
concurrent edits of the same item in one process cannot interleave. Writers
in separate processes are not coordinated.
"""

import threading
from contextlib import contextmanager
from typing import Any, Iterator

from loguru import logger

from .registry import ResourceTypeRegistry, get_type_registry
from .services.fs import UploadHandle
from .types import OperationResult, ResourceType, TypeServices


class ItemLocks:
    """
    Mutex per item id.

    An entry lives while any thread holds or waits for it, so every caller
    for the same id shares one lock and idle ids take no space.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[int, list] = {}  # item id -> [lock, holders + waiters]

    @contextmanager
    def hold(self, item_id: int) -> Iterator[None]:
        with self._guard:
            entry = self._locks.setdefault(item_id, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[item_id]


class ItemLifecycle:
    """Coordinator between the item store and resource types."""

    def __init__(self, services: TypeServices, registry: ResourceTypeRegistry | None = None):
        """
        Args:
            services: Collaborators passed to every resource type instance
            registry: Type registry (defaults to the global registry)
        """
        self.services = services
        self.registry = registry or get_type_registry()
        self.locks = ItemLocks()
        self._instances: dict[str, ResourceType] = {}

    def resource_type(self, type_name: str) -> ResourceType:
        """
        Instance of the type registered under a discriminator.

        Raises:
            UnknownResourceTypeError: If the discriminator is not registered
        """
        type_class = self.registry.get(type_name)
        instance = self._instances.get(type_name)
        if instance is None or type(instance) is not type_class:
            instance = type_class(self.services)
            self._instances[type_name] = instance
        return instance

    def create(
        self,
        item_id: int,
        type_name: str,
        data: dict[str, Any],
        upload: UploadHandle | None = None,
    ) -> OperationResult:
        resource_type = self.resource_type(type_name)
        with self.locks.hold(item_id):
            result = resource_type.create(item_id, data, upload)
        self._log("create", item_id, type_name, result)
        return result

    def update(
        self,
        item_id: int,
        type_name: str,
        data: dict[str, Any],
        upload: UploadHandle | None = None,
    ) -> OperationResult:
        resource_type = self.resource_type(type_name)
        with self.locks.hold(item_id):
            result = resource_type.update(item_id, data, upload)
        self._log("update", item_id, type_name, result)
        return result

    def delete(self, item_id: int, type_name: str) -> OperationResult:
        resource_type = self.resource_type(type_name)
        with self.locks.hold(item_id):
            result = resource_type.delete(item_id)
        self._log("delete", item_id, type_name, result)
        return result

    @staticmethod
    def _log(operation: str, item_id: int, type_name: str, result: OperationResult) -> None:
        if result:
            logger.info(f"{operation} {type_name} item {item_id}: ok")
        else:
            logger.error(f"{operation} {type_name} item {item_id} failed: {result.failures}")
