"""Exceptions raised by the LOR storage subsystem."""


class LORError(Exception):
    """Base class for LOR errors."""


class StorageError(LORError):
    """A directory or file operation failed for filesystem reasons."""


class ItemNotFoundError(LORError):
    """No item exists with the requested id."""

    def __init__(self, item_id: int):
        super().__init__(f"Item not found: {item_id}")
        self.item_id = item_id


class UnknownResourceTypeError(LORError):
    """No resource type is registered under the requested discriminator."""

    def __init__(self, type_name: str, available: list[str] | None = None):
        message = f"Unknown resource type: {type_name}"
        if available:
            message += f". Registered: {', '.join(available)}"
        super().__init__(message)
        self.type_name = type_name
