"""Command-line interface for ask-ldap."""

import argparse
import sys
from typing import List, Optional

from .config import ConfigError, load_config, merge_config_with_args, write_config
from .constants import Colors, DEFAULT_CONFIG_PATH, DEFAULT_HOSTNAME, DEFAULT_PORT, DEFAULT_VERBOSITY
from .ldap import BindError, ConnectError, open_session
from .profiles import VerbosityError, profile_name
from .search import run_queries


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ask-ldap",
        description="Query an LDAP / Active Directory server and print entries in readable form.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Options not given on the command line are taken from the config file,
then from the built-in defaults.

Examples:
  %(prog)s -H dc01.corp.local -b 'DC=corp,DC=local' -u admin@corp.local -p 'P@ss' '(sAMAccountName=jdoe)'
  %(prog)s --use-tls -P 636 -v 0 '(objectClass=group)' '(objectClass=computer)'
  %(prog)s -H dc01.corp.local -u admin@corp.local -p 'P@ss' --write-config '(cn=*)'
        """,
    )
    # Connection options default to None so the config file can fill them in
    parser.add_argument("-H", "--hostname", help=f"FQDN or IP of the LDAP host (default: {DEFAULT_HOSTNAME})")
    parser.add_argument("-P", "--port", type=int, help=f"Port number on host (default: {DEFAULT_PORT})")
    parser.add_argument("--use-tls", dest="use_tls", action=argparse.BooleanOptionalAction, default=None,
                        help="Connect with LDAPS (SSL/TLS)")
    parser.add_argument("--tls-validate", dest="tls_validate", action=argparse.BooleanOptionalAction, default=None,
                        help="Validate the server certificate on TLS connections (off by default)")
    parser.add_argument("-b", "--base-dn", dest="base_dn", help="Search base DN")
    parser.add_argument("-u", "--username", help="Bind username (user@example.com); empty for anonymous bind")
    parser.add_argument("-p", "--password", help="Bind password")
    parser.add_argument("-v", "--verbosity", type=int, choices=[0, 1, 2],
                        help=f"Attributes to show: 0=short, 1=default, 2=all (default: {DEFAULT_VERBOSITY})")
    parser.add_argument("-c", "--config", default=DEFAULT_CONFIG_PATH,
                        help=f"Config file in JSON format (default: {DEFAULT_CONFIG_PATH})")
    parser.add_argument("--write-config", action="store_true",
                        help="Write the effective settings to the config file on exit")
    parser.add_argument("filters", nargs="+", metavar="FILTER",
                        help="LDAP search filter; each one runs as a separate search")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Disable colors if not a TTY
    if not sys.stderr.isatty():
        Colors.disable()

    try:
        config = merge_config_with_args(load_config(args.config), args)
    except (ConfigError, VerbosityError) as e:
        print(f"{Colors.RED}[!] Invalid configuration: {e}{Colors.NC}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"{Colors.RED}[!] Failed to read config {args.config}: {e}{Colors.NC}", file=sys.stderr)
        return 1

    transport = "TLS" if config.use_tls else "plain"
    print(f"{Colors.BLUE}[+] Connecting to {config.hostname}:{config.port} ({transport}), "
          f"verbosity {profile_name(config.verbosity)}{Colors.NC}", file=sys.stderr)
    if config.use_tls and not config.tls_validate:
        print(f"{Colors.ORANGE}[!] WARNING: server certificate is not validated (use --tls-validate){Colors.NC}",
              file=sys.stderr)

    try:
        session = open_session(config)
    except ConnectError as e:
        print(f"{Colors.RED}[!] CONNECT: {e}{Colors.NC}", file=sys.stderr)
        return 1
    except BindError as e:
        print(f"{Colors.RED}[!] BIND: {e}{Colors.NC}", file=sys.stderr)
        return 1

    with session:
        failures = run_queries(session, config, args.filters)

    if failures:
        print(f"{Colors.ORANGE}[!] {failures} of {len(args.filters)} searches failed{Colors.NC}", file=sys.stderr)

    if args.write_config:
        try:
            path = write_config(args.config, config)
        except OSError as e:
            print(f"{Colors.RED}[!] Failed to write config: {e}{Colors.NC}", file=sys.stderr)
            return 1
        print(f"{Colors.GREEN}[+] Config written to: {path}{Colors.NC}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
