from .config import WalkConfig, parse_hexsum
from .entry import Broken, CycleOrError, EntryType, Resolution, Resolved
from .errors import (
    ConfigurationError,
    DirhashError,
    FilesystemError,
    InputPathError,
    InvariantError,
    UnsupportedAlgorithmError,
)

__all__ = [
    "Broken",
    "ConfigurationError",
    "CycleOrError",
    "DirhashError",
    "EntryType",
    "FilesystemError",
    "InputPathError",
    "InvariantError",
    "Resolution",
    "Resolved",
    "UnsupportedAlgorithmError",
    "WalkConfig",
    "parse_hexsum",
]
