"""Running searches and rendering their results."""

import sys
from typing import Iterable, List, Optional, TextIO

from .constants import Colors
from .display import decode
from .ldap import SearchError
from .models import Config, Entry, SearchResult
from .profiles import attributes_for_level

# Width of the right-aligned attribute name column
NAME_WIDTH = 20
INDENT = "    "


def run_search(session, base_dn: str, search_filter: str, attributes: List[str]) -> SearchResult:
    """
    Issue one search through the session.

    Args:
        session: Anything with a ``search(base_dn, search_filter, attributes)``
            method returning a SearchResult (normally a DirectorySession)
        base_dn: Search base; the whole subtree below it is searched
        search_filter: LDAP filter string
        attributes: Attribute names to request

    Raises:
        SearchError: if the search failed
    """
    return session.search(base_dn, search_filter, attributes)


def render_entry(entry: Entry) -> List[str]:
    """Format one entry: the DN, then each attribute in the order returned."""
    lines = [f"ENTRY: '{entry.dn}'"]
    for name, values in entry.attributes:
        label = f"{INDENT}{name:>{NAME_WIDTH}}:"
        if len(values) == 1:
            lines.append(f"{label} {decode(name, values[0])}")
            continue
        lines.append(label)
        for value in values:
            lines.append(f"{INDENT}{'':>{NAME_WIDTH}}  {decode(name, value)}")
    return lines


def render_result(search_filter: str, result: SearchResult) -> str:
    """Format a complete search block: filter, summary, referrals, entries."""
    lines = [
        f"SEARCH:: '{search_filter}'",
        "RESULT::",
        result.summary(),
    ]
    lines.extend(f"REFERRAL: '{uri}'" for uri in result.referrals)
    for entry in result.entries:
        lines.extend(render_entry(entry))
    return "\n".join(lines) + "\n"


def run_queries(
    session,
    config: Config,
    filters: Iterable[str],
    out: Optional[TextIO] = None,
) -> int:
    """
    Run each filter in order against one session and print the results.

    A failed search is reported on stderr and skipped; the remaining filters
    still run.

    Returns:
        Number of searches that failed
    """
    out = out or sys.stdout
    attributes = attributes_for_level(config.verbosity)
    failures = 0

    for search_filter in filters:
        try:
            result = run_search(session, config.base_dn, search_filter, attributes)
        except SearchError as e:
            failures += 1
            print(f"{Colors.RED}[!] Search '{search_filter}' failed: {e}{Colors.NC}", file=sys.stderr)
            continue
        out.write(render_result(search_filter, result))
        out.flush()

    return failures
