"""Generic domain exceptions.

Raised by the Service Layer when a request cannot be honoured.
``modules.core.exception_handler`` translates them into HTTP responses;
services never build responses themselves.
"""

from __future__ import annotations

from typing import Any


class ResourceNotFound(Exception):
    """The requested resource has no corresponding row."""

    def __init__(self, resource_name: str, field_name: str, field_value: Any) -> None:
        self.resource_name = resource_name
        self.field_name = field_name
        self.field_value = field_value
        super().__init__(f"{resource_name} not found with {field_name}: {field_value}")


class InvalidArgument(ValueError):
    """A caller-supplied value violates a domain rule."""
