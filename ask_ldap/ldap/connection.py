"""Transport selection and the directory session wrapper."""

import ssl
from enum import Enum
from typing import Any, Dict, List, Optional

from ldap3 import DEREF_ALWAYS, NONE, SUBTREE, Connection, Server, Tls
from ldap3.core.exceptions import LDAPException

from ..constants import SEARCH_SIZE_LIMIT, SEARCH_TIME_LIMIT
from ..models import Config, Entry, SearchResult
from .errors import BindError, ConnectError, SearchError, parse_ad_error_code


class Transport(Enum):
    """Wire transport to the directory server."""
    PLAIN = "plain"
    TLS = "tls"

    @classmethod
    def from_flag(cls, use_tls: bool) -> "Transport":
        return cls.TLS if use_tls else cls.PLAIN


def build_server(
    transport: Transport,
    hostname: str,
    port: int,
    tls_validate: bool = False,
) -> Server:
    """
    Build the ldap3 Server for a transport.

    The TLS path does NOT validate the server certificate unless tls_validate
    is set. Domain controllers frequently present self-signed or internal-CA
    certificates; the channel is still encrypted, but the endpoint is not
    authenticated and a man-in-the-middle cannot be ruled out.

    Schema and DSE info are not fetched (get_info=NONE): the tool only needs
    raw values, and skipping it keeps one round trip per query.
    """
    if transport is Transport.TLS:
        tls = Tls(validate=ssl.CERT_REQUIRED if tls_validate else ssl.CERT_NONE)
        return Server(hostname, port=port, use_ssl=True, tls=tls, get_info=NONE)
    if transport is Transport.PLAIN:
        return Server(hostname, port=port, use_ssl=False, get_info=NONE)
    raise ValueError(f"Unknown transport: {transport!r}")


def _result_description(result: Optional[Dict[str, Any]]) -> str:
    """Compose 'description: message' from an ldap3 result dict."""
    if not result:
        return "no result from server"
    description = result.get("description") or f"result {result.get('result')}"
    message = result.get("message")
    return f"{description}: {message}" if message else description


class DirectorySession:
    """
    A single connected, authenticated LDAP connection.

    Attributes:
        server: The ldap3 Server object
        connection: The ldap3 Connection object (None until connect() is called)

    Example:
        with DirectorySession(server, 'user@corp.local', 'secret') as session:
            result = session.search('DC=corp,DC=local', '(cn=jdoe)', ['cn'])
    """

    def __init__(self, server: Server, username: str = "", password: str = ""):
        self.server = server
        self.username = username
        self.password = password
        self.connection: Optional[Connection] = None

    def connect(self) -> "DirectorySession":
        """Open the transport and bind. Returns self for chaining."""
        # Empty username means an anonymous bind
        auth_params: Dict[str, Any] = {}
        if self.username:
            auth_params = {"user": self.username, "password": self.password}

        # Only attributes the server actually returned end up in raw_attributes
        connection = Connection(
            self.server,
            raise_exceptions=False,
            return_empty_attributes=False,
            **auth_params,
        )
        try:
            connection.open()
        except LDAPException as e:
            raise ConnectError(f"Could not connect to {self.server.host}:{self.server.port}: {e}") from e

        try:
            bound = connection.bind()
        except LDAPException as e:
            connection.unbind()
            raise BindError(f"Bind failed: {e}", parse_ad_error_code(str(e))) from e

        if not bound:
            description = _result_description(connection.result)
            connection.unbind()
            raise BindError(f"Bind failed: {description}", parse_ad_error_code(description))

        self.connection = connection
        return self

    def close(self) -> None:
        """Close the LDAP connection."""
        if self.connection:
            self.connection.unbind()
            self.connection = None

    def __enter__(self) -> "DirectorySession":
        """Context manager entry."""
        if self.connection is None:
            return self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Context manager exit."""
        self.close()
        return False

    def search(
        self,
        base_dn: str,
        search_filter: str,
        attributes: List[str],
    ) -> SearchResult:
        """
        Run one subtree search with the tool's fixed parameters.

        Aliases are always dereferenced, at most 10000 entries are returned
        and the server is asked to give up after 30 seconds.

        Raises:
            SearchError: on any library error or non-success result code
        """
        if not self.connection:
            raise RuntimeError("Not connected. Call connect() first or use as context manager.")

        try:
            self.connection.search(
                search_base=base_dn,
                search_filter=search_filter,
                search_scope=SUBTREE,
                dereference_aliases=DEREF_ALWAYS,
                attributes=attributes,
                size_limit=SEARCH_SIZE_LIMIT,
                time_limit=SEARCH_TIME_LIMIT,
                types_only=False,
                controls=None,
            )
        except LDAPException as e:
            raise SearchError(str(e)) from e

        # ldap3's search() returns False for an empty but successful search,
        # so success is judged from the result code
        result = self.connection.result or {}
        if result.get("result") != 0:
            raise SearchError(_result_description(result))

        return parse_response(self.connection.response or [], result)


def parse_response(response: List[Dict[str, Any]], result: Dict[str, Any]) -> SearchResult:
    """Convert an ldap3 response list into a SearchResult, keeping server order."""
    search_result = SearchResult(
        result_code=result.get("result", 0),
        description=result.get("description") or "success",
    )
    for item in response:
        if item.get("type") == "searchResEntry":
            raw = item.get("raw_attributes") or {}
            search_result.entries.append(Entry(
                dn=item.get("dn", ""),
                attributes=[(name, list(values)) for name, values in raw.items()],
            ))
        elif item.get("type") == "searchResRef":
            search_result.referrals.extend(item.get("uri") or [])
    return search_result


def open_session(config: Config) -> DirectorySession:
    """
    Connect and bind according to the config.

    Raises:
        ConnectError: if the transport cannot be established
        BindError: if authentication fails
    """
    transport = Transport.from_flag(config.use_tls)
    try:
        server = build_server(transport, config.hostname, config.port, config.tls_validate)
    except LDAPException as e:
        raise ConnectError(f"Invalid server {config.hostname}:{config.port}: {e}") from e
    return DirectorySession(server, config.username, config.password).connect()
