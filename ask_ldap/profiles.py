"""Attribute selection per verbosity level."""

from typing import List, Tuple


SHORT_ATTRIBUTES: Tuple[str, ...] = ("cn", "distinguishedName")

DEFAULT_ATTRIBUTES: Tuple[str, ...] = (
    "accountExpires",
    "badPasswordTime",
    "badPwdCount",
    "cn",
    "displayName",
    "distinguishedName",
    "employeeType",
    "homeDirectory",
    "homeDrive",
    "lastLogon",
    "lastLogonTimestamp",
    "lockoutTime",
    "logonCount",
    "mail",
    "mailNickname",
    "manager",
    "member",
    "memberOf",
    "name",
    "pwdLastSet",
    "title",
    "userPrincipalName",
    "whenCreated",
)

# '*' asks the server for every user attribute of the entry
ALL_ATTRIBUTES: Tuple[str, ...] = ("*",)

VERBOSITY_PROFILES = (
    ("short", SHORT_ATTRIBUTES),
    ("default", DEFAULT_ATTRIBUTES),
    ("all", ALL_ATTRIBUTES),
)


class VerbosityError(ValueError):
    """Raised for a verbosity level outside the known profiles."""


def validate_level(level) -> int:
    """Return ``level`` unchanged if it names a profile, else raise VerbosityError."""
    # bool is an int subclass; True/False in a config file is a mistake, not a level
    if isinstance(level, bool) or not isinstance(level, int):
        raise VerbosityError(f"Verbosity must be an integer, got {level!r}")
    if not 0 <= level < len(VERBOSITY_PROFILES):
        raise VerbosityError(
            f"Verbosity {level} out of range (0-{len(VERBOSITY_PROFILES) - 1})"
        )
    return level


def profile_name(level: int) -> str:
    """Human-readable name of a verbosity level (short/default/all)."""
    return VERBOSITY_PROFILES[validate_level(level)][0]


def attributes_for_level(level: int) -> List[str]:
    """
    Get the attribute names to request for a verbosity level.

    Args:
        level: 0 (short), 1 (default) or 2 (all)

    Returns:
        A new list of attribute names, in request order

    Raises:
        VerbosityError: if level is not 0, 1 or 2
    """
    return list(VERBOSITY_PROFILES[validate_level(level)][1])
