"""Path layout and permission modes for the gmcli config directory.

All gmcli state lives in a single directory (default ~/.gmcli):
- accounts.json: registered email accounts
- credentials.json: OAuth client id/secret
- default.json: the default account pointer

The directory is owner-only (700) and every managed file is 600.
"""

import os
from dataclasses import dataclass
from pathlib import Path


# Overrides the default ~/.gmcli location
CONFIG_DIR_ENV = "GMCLI_CONFIG_DIR"

ACCOUNTS_FILENAME = "accounts.json"
CREDENTIALS_FILENAME = "credentials.json"
DEFAULT_FILENAME = "default.json"

# Restrictive permissions: only owner can read/write (and traverse the dir)
DIR_MODE = 0o700
FILE_MODE = 0o600


@dataclass(frozen=True)
class StorePaths:
    """Locations of the files managed by AccountStorage.

    Example:
        paths = StorePaths(Path("/tmp/gmcli-test"))
        paths.accounts_file  # /tmp/gmcli-test/accounts.json
    """

    config_dir: Path

    @property
    def accounts_file(self) -> Path:
        return self.config_dir / ACCOUNTS_FILENAME

    @property
    def credentials_file(self) -> Path:
        return self.config_dir / CREDENTIALS_FILENAME

    @property
    def default_file(self) -> Path:
        return self.config_dir / DEFAULT_FILENAME

    @property
    def managed_files(self) -> tuple[Path, Path, Path]:
        """All files whose permissions the store enforces."""
        return (self.accounts_file, self.credentials_file, self.default_file)


def default_paths() -> StorePaths:
    """Build the paths for the current user.

    Uses $GMCLI_CONFIG_DIR when set, otherwise ~/.gmcli.
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return StorePaths(Path(override).expanduser())

    return StorePaths(Path.home() / ".gmcli")
