"""
ask-ldap - LDAP / Active Directory query tool

Binds to a directory server, runs one search per filter given on the command
line and prints each entry's attributes in readable form (timestamps decoded,
binary values summarized).
"""

__version__ = "1.0.0"

from .constants import Colors, DEFAULT_CONFIG_PATH
from .models import Config, Entry, SearchResult
from .profiles import VerbosityError, attributes_for_level
from .display import DecoderKind, decode, decoder_kind
from .ldap import (
    BindError,
    ConnectError,
    DirectorySession,
    LDAPToolError,
    SearchError,
    Transport,
    build_server,
    open_session,
)
from .search import render_entry, render_result, run_queries, run_search
from .config import ConfigError, load_config, merge_config_with_args, write_config
from .cli import main

__all__ = [
    # Version
    "__version__",
    # Constants
    "Colors",
    "DEFAULT_CONFIG_PATH",
    # Models
    "Config",
    "Entry",
    "SearchResult",
    # Verbosity
    "VerbosityError",
    "attributes_for_level",
    # Display
    "DecoderKind",
    "decode",
    "decoder_kind",
    # LDAP
    "LDAPToolError",
    "ConnectError",
    "BindError",
    "SearchError",
    "Transport",
    "build_server",
    "DirectorySession",
    "open_session",
    # Search
    "run_search",
    "run_queries",
    "render_entry",
    "render_result",
    # Config
    "ConfigError",
    "load_config",
    "merge_config_with_args",
    "write_config",
    # CLI
    "main",
]
