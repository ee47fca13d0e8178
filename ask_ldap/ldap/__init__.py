"""LDAP session handling on top of ldap3."""

from .errors import (
    AD_ERROR_CODES,
    AD_ERROR_CODE_RE,
    BindError,
    ConnectError,
    LDAPToolError,
    SearchError,
    parse_ad_error_code,
)
from .connection import DirectorySession, Transport, build_server, open_session, parse_response

__all__ = [
    "AD_ERROR_CODES",
    "AD_ERROR_CODE_RE",
    "parse_ad_error_code",
    "LDAPToolError",
    "ConnectError",
    "BindError",
    "SearchError",
    "Transport",
    "build_server",
    "DirectorySession",
    "parse_response",
    "open_session",
]
