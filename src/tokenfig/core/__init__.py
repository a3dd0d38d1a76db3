"""Core tokenfig functionality: IR, configuration, file discovery, token loading."""

from . import ir
from .config import BuildConfig, load_build_config
from .errors import (
    ConfigError,
    EmitError,
    ErrorContext,
    ReferenceCycleError,
    TokenfigError,
    TokenLoadError,
)
from .fileset import discover_token_files, is_dark_source
from .loader import TokenDictionary, load_token_dictionary

__all__ = [
    "ir",
    "TokenfigError",
    "ConfigError",
    "TokenLoadError",
    "ReferenceCycleError",
    "EmitError",
    "ErrorContext",
    "BuildConfig",
    "load_build_config",
    "discover_token_files",
    "is_dark_source",
    "TokenDictionary",
    "load_token_dictionary",
]
