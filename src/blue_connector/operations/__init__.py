"""Operations exposed to the host."""

from .base import BaseOperation
from .registry import OperationRegistry, operation_registry, register_operation

# Import all operation implementations to trigger registration
from . import get_companies  # noqa: F401
from . import get_projects  # noqa: F401
from . import get_records  # noqa: F401
from . import update_record  # noqa: F401
from . import custom_query  # noqa: F401

__all__ = ["BaseOperation", "OperationRegistry", "operation_registry", "register_operation"]
