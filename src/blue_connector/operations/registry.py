"""Operation registry for dispatching host operation names."""

import logging
from typing import Dict, List, Optional, Type

from ..client.exceptions import DispatchError
from ..types import OperationContext, OperationResult
from .base import BaseOperation

logger = logging.getLogger(__name__)


class OperationRegistry:
    """Registry mapping operation names to operation instances."""

    def __init__(self):
        self._operations: Dict[str, BaseOperation] = {}

    def register(self, operation_class: Type[BaseOperation]):
        """Register an operation class under its ``name``."""
        operation = operation_class()
        self._operations[operation.name] = operation

        logger.debug("Registered operation: %s", operation.name)

    def get(self, name: str) -> Optional[BaseOperation]:
        """Get an operation instance by name."""
        return self._operations.get(name)

    def list_operations(self) -> List[str]:
        """List all registered operation names."""
        return list(self._operations.keys())

    def get_operation_info(self, name: str) -> Optional[Dict[str, str]]:
        """Get operation information."""
        operation = self.get(name)
        if not operation:
            return None

        return {
            "name": operation.name,
            "description": operation.description,
        }

    async def dispatch(self, name: str, context: OperationContext) -> OperationResult:
        """Look up ``name`` and execute it for one item.

        Raises:
            DispatchError: If ``name`` is not registered. Nothing is sent.
        """
        operation = self.get(name)
        if operation is None:
            raise DispatchError(f"Unknown operation: {name}", operation=str(name))
        return await operation.execute(context)


# Global operation registry instance
operation_registry = OperationRegistry()


def register_operation(operation_class: Type[BaseOperation]) -> Type[BaseOperation]:
    """Decorator to register an operation in the global registry."""
    operation_registry.register(operation_class)
    return operation_class
