"""Data models for configuration and search results."""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Tuple

from .constants import DEFAULT_HOSTNAME, DEFAULT_PORT, DEFAULT_VERBOSITY
from .profiles import validate_level


@dataclass(frozen=True)
class Config:
    """Effective settings for one run. Built once at startup, never mutated."""
    hostname: str = DEFAULT_HOSTNAME
    port: int = DEFAULT_PORT
    use_tls: bool = False
    # Certificate validation on the TLS path is opt-in (self-signed DCs are common)
    tls_validate: bool = False
    base_dn: str = ""
    username: str = ""
    password: str = ""
    verbosity: int = DEFAULT_VERBOSITY

    def __post_init__(self):
        validate_level(self.verbosity)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Entry:
    """A single search result entry, with attributes in the order returned."""
    dn: str
    attributes: List[Tuple[str, List[bytes]]] = field(default_factory=list)


@dataclass
class SearchResult:
    """Entries, referrals and the server's final result of one search."""
    entries: List[Entry] = field(default_factory=list)
    referrals: List[str] = field(default_factory=list)
    result_code: int = 0
    description: str = "success"

    def summary(self) -> str:
        return (
            f"{len(self.entries)} entries, {len(self.referrals)} referrals "
            f"({self.description})"
        )
