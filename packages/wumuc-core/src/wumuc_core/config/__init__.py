from .loader import load_config
from .models import (
    ResourceFilesConfig,
    UpdateConfig,
    WumucConfig,
)

__all__ = [
    "ResourceFilesConfig",
    "UpdateConfig",
    "WumucConfig",
    "load_config",
]
