"""Constants used throughout the application."""


class Colors:
    """ANSI color codes for terminal output."""
    NC = '\033[0m'
    RED = '\033[0;31m'
    BLUE = '\033[0;34m'
    GREEN = '\033[0;32m'
    LBLUE = '\033[1;34m'
    ORANGE = '\033[0;33m'

    @classmethod
    def disable(cls):
        """Disable colors (for non-TTY output)."""
        cls.NC = cls.RED = cls.BLUE = cls.GREEN = cls.LBLUE = cls.ORANGE = ''


# Default config file location (JSON, '~' is expanded at load time)
DEFAULT_CONFIG_PATH = "~/.ask-ldap.conf"

DEFAULT_HOSTNAME = "localhost"
DEFAULT_PORT = 389
DEFAULT_VERBOSITY = 1

# Fixed search parameters
SEARCH_SIZE_LIMIT = 10000
SEARCH_TIME_LIMIT = 30  # seconds, enforced by the server

# Binary values are shown as a hex prefix of at most this many bytes
BINARY_PREVIEW_BYTES = 0x1f

# 100-nanosecond intervals between 1601-01-01 and 1970-01-01
WINDOWS_TO_UNIX_EPOCH = 116444736000000000

BINARY_ATTRIBUTES = frozenset({
    "jpegPhoto",
    "objectGUID",
    "objectSid",
})

WINDOWS_TIMESTAMP_ATTRIBUTES = frozenset({
    "accountExpires",
    "lastLogon",
    "lockoutTime",
    "lastLogonTimestamp",
    "pwdLastSet",
    "badPasswordTime",
})

GENERALIZED_TIME_ATTRIBUTES = frozenset({
    "whenCreated",
})
