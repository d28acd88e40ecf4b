"""gmcli: local account configuration for a command-line Gmail client."""

__version__ = "0.1.0"
