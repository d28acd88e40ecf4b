"""Configuration layout and record types for gmcli.

Usage:
    from gmcli.config import default_paths, StorePaths

    paths = default_paths()  # ~/.gmcli, or $GMCLI_CONFIG_DIR
"""

from .paths import (
    CONFIG_DIR_ENV,
    DIR_MODE,
    FILE_MODE,
    StorePaths,
    default_paths,
)
from .schema import Credentials, EmailAccount, OAuthConfig

__all__ = [
    "StorePaths",
    "default_paths",
    "CONFIG_DIR_ENV",
    "DIR_MODE",
    "FILE_MODE",
    "EmailAccount",
    "OAuthConfig",
    "Credentials",
]
