"""Account store backed by JSON files in the gmcli config directory.

Manages three records:
- accounts.json: list of EmailAccount objects, keyed by email
- credentials.json: {"clientId", "clientSecret"}
- default.json: {"email"}

Reads are forgiving: a missing or corrupt file looks the same as an
empty one. Writes are strict: OSError propagates to the caller.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from gmcli.config.paths import DIR_MODE, FILE_MODE, StorePaths
from gmcli.config.schema import Credentials, EmailAccount

logger = logging.getLogger(__name__)


class AccountStorage:
    """Persistent store for accounts, client credentials and the default account.

    Accounts are loaded once at construction and served from memory.
    Every mutation rewrites accounts.json. Credentials and the default
    pointer are read from disk on every call.

    Example:
        storage = AccountStorage(default_paths())
        storage.add_account({"email": "me@example.com", "oauth2": {...}})
        storage.set_default_email("me@example.com")
    """

    def __init__(self, paths: StorePaths):
        """Open the store, creating and hardening the config directory.

        Args:
            paths: Locations of the config directory and managed files.

        Raises:
            OSError: If the directory cannot be created or its
                permissions cannot be set.
        """
        self._paths = paths
        self._accounts: dict[str, EmailAccount] = {}

        self._ensure_config_dir()
        self._fix_permissions()
        self._load_accounts()

    @property
    def paths(self) -> StorePaths:
        """Get the file locations used by this store."""
        return self._paths

    def _ensure_config_dir(self) -> None:
        self._paths.config_dir.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)

    def _fix_permissions(self) -> None:
        """Re-apply owner-only permissions to the directory and existing files.

        Runs on every construction so that permissions loosened outside
        gmcli are repaired.
        """
        config_dir = self._paths.config_dir
        if config_dir.exists():
            config_dir.chmod(DIR_MODE)

        for path in self._paths.managed_files:
            if path.exists():
                path.chmod(FILE_MODE)
                logger.debug("Set permissions %o on %s", FILE_MODE, path)

    def _load_accounts(self) -> None:
        accounts_file = self._paths.accounts_file
        if not accounts_file.exists():
            return

        try:
            data = json.loads(accounts_file.read_text(encoding="utf-8"))
            loaded: dict[str, EmailAccount] = {}
            for account in data:
                email = account["email"]
                if not isinstance(email, str) or not email:
                    raise TypeError(f"invalid account email: {email!r}")
                loaded[email] = account
        except (OSError, ValueError, TypeError, KeyError, RecursionError) as e:
            # Corrupted file - treat as no accounts
            logger.debug("Ignoring unreadable %s: %s", accounts_file, e)
            return

        self._accounts = loaded

    def add_account(self, account: EmailAccount) -> None:
        """Add or replace an account, keyed by its email, and save.

        If saving fails the in-memory accounts are left as they were.

        Raises:
            ValueError: If the account's email is empty.
            OSError: If accounts.json cannot be written.
            TypeError: If the account holds values JSON cannot encode.
        """
        email = account["email"]
        if not email:
            raise ValueError("Account email must not be empty")

        # Memory only changes once the file is written
        updated = {**self._accounts, email: account}
        _write_json(self._paths.accounts_file, list(updated.values()))
        self._accounts = updated

    def get_account(self, email: str) -> EmailAccount | None:
        """Get an account by email, or None if not registered."""
        return self._accounts.get(email)

    def get_all_accounts(self) -> list[EmailAccount]:
        """Get all accounts in the order they were first added."""
        return list(self._accounts.values())

    def delete_account(self, email: str) -> bool:
        """Remove an account.

        Returns:
            True if the account existed and was removed. The file is only
            rewritten in that case.
        """
        if email not in self._accounts:
            return False

        # Memory only changes once the file is written
        remaining = {k: v for k, v in self._accounts.items() if k != email}
        _write_json(self._paths.accounts_file, list(remaining.values()))
        self._accounts = remaining
        return True

    def has_account(self, email: str) -> bool:
        return email in self._accounts

    def set_credentials(self, client_id: str, client_secret: str) -> None:
        """Overwrite the stored OAuth client credentials."""
        credentials: Credentials = {
            "clientId": client_id,
            "clientSecret": client_secret,
        }
        _write_json(self._paths.credentials_file, credentials)

    def get_credentials(self) -> Credentials | None:
        """Load the OAuth client credentials.

        Returns:
            The credentials, or None if the file is missing or malformed.
        """
        data = _read_json(self._paths.credentials_file)
        if not isinstance(data, dict):
            return None

        client_id = data.get("clientId")
        client_secret = data.get("clientSecret")
        if not isinstance(client_id, str) or not isinstance(client_secret, str):
            logger.debug("Ignoring credentials without clientId/clientSecret")
            return None

        return {"clientId": client_id, "clientSecret": client_secret}

    def set_default_email(self, email: str) -> None:
        """Point the default account at ``email``.

        The email is not checked against the registered accounts.
        """
        _write_json(self._paths.default_file, {"email": email})

    def get_default_email(self) -> str | None:
        """Get the default account email, or None if unset or unreadable."""
        data = _read_json(self._paths.default_file)
        if not isinstance(data, dict):
            return None

        email = data.get("email")
        return email if isinstance(email, str) else None

    def clear_default_email(self) -> None:
        """Remove the default account pointer. No-op if none is set."""
        self._paths.default_file.unlink(missing_ok=True)


def _read_json(path: Path) -> Any:
    """Parse a JSON file, returning None if missing or invalid."""
    if not path.exists():
        return None

    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (ValueError, RecursionError, OSError) as e:
        # ValueError covers JSONDecodeError, UnicodeDecodeError and the
        # integer digit limit
        logger.debug("Ignoring unreadable %s: %s", path, e)
        return None


def _write_json(path: Path, data: Any) -> None:
    """Replace ``path`` with pretty-printed JSON, created as owner-only.

    The document is serialized before any file is touched, then written
    to a temp file in the same directory and renamed over ``path``, so a
    failed write never leaves a truncated file behind.

    Raises:
        TypeError: If ``data`` holds values JSON cannot encode.
        OSError: If the file cannot be written.
    """
    payload = json.dumps(data, indent=2)

    # mkstemp creates the file with mode 600
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.chmod(tmp_name, FILE_MODE)
        # os.replace is atomic on POSIX when src and dest share a filesystem
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def resolve_account(
    storage: AccountStorage, email: str | None = None
) -> EmailAccount | None:
    """Pick the account a command should act on.

    Resolution order:
    1. ``email`` if given (None if it is not registered)
    2. the default account, if it still names a registered account
    3. the only account, when exactly one is registered

    A default that points at a removed account is skipped, not cleared.

    Args:
        storage: The account store.
        email: Account explicitly requested by the user.

    Returns:
        The account, or None if no account can be chosen.
    """
    if email is not None:
        return storage.get_account(email)

    default_email = storage.get_default_email()
    if default_email is not None:
        account = storage.get_account(default_email)
        if account is not None:
            return account
        logger.debug("Default account %s is not registered", default_email)

    accounts = storage.get_all_accounts()
    if len(accounts) == 1:
        return accounts[0]

    return None
