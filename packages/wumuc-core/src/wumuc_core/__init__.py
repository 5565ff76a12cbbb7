"""wumuc-core: builds update packages against a baseline product distribution."""

from wumuc_core.builder import BuildResult, UpdateBuilder
from wumuc_core.context import RunContext
from wumuc_core.errors import (
    CopyError,
    DescriptorError,
    InputError,
    ReadError,
    UpdateError,
    ValidationError,
)

__all__ = [
    "BuildResult",
    "CopyError",
    "DescriptorError",
    "InputError",
    "ReadError",
    "RunContext",
    "UpdateBuilder",
    "UpdateError",
    "ValidationError",
]
