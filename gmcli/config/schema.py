"""Record shapes persisted by the account store.

Uses TypedDict for type safety without runtime overhead.
Keys match the camelCase JSON written to ~/.gmcli.
"""

from typing import TypedDict

from typing_extensions import NotRequired


class OAuthConfig(TypedDict, total=False):
    """OAuth material attached to an account by the setup flow.

    Attributes:
        clientId: OAuth client ID used to obtain the tokens.
        clientSecret: OAuth client secret.
        refreshToken: Long-lived refresh token for the account.
        accessToken: Optional cached access token.
    """

    clientId: str
    clientSecret: str
    refreshToken: str
    accessToken: str


class EmailAccount(TypedDict):
    """A registered email account.

    Only ``email`` is interpreted by the store; any other keys are
    kept as-is when the account is saved and loaded.

    Attributes:
        email: Unique, case-sensitive account address.
        oauth2: OAuth material for the mail client.
    """

    email: str
    oauth2: NotRequired[OAuthConfig]


class Credentials(TypedDict):
    """Global OAuth client credentials."""

    clientId: str
    clientSecret: str
