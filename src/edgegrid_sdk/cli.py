"""
Command-line interface for EdgeGrid Python SDK
Prints EG1 Authorization headers for requests described on the command line
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional

from . import __version__
from .config.edgerc import CredentialStore, DEFAULT_SECTION, resolve_edgerc_path
from .exceptions import EdgeGridSDKError
from .signing.eg1_signer import EG1Signer
from .signing.types import RequestDescriptor

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='edgegrid-sign',
        description='Compute EG1-HMAC-SHA256 Authorization headers from .edgerc credentials'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'EdgeGrid Python SDK {__version__}'
    )

    parser.add_argument(
        '--edgerc',
        help='Path to the .edgerc file (default: $EDGERC or ~/.edgerc)'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    # Create subparsers for different commands
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    setup_header_parser(subparsers)
    setup_sections_parser(subparsers)

    return parser


def setup_header_parser(subparsers):
    """Setup header subcommand."""
    header_parser = subparsers.add_parser('header', help='Print the Authorization header for a request')
    header_parser.add_argument('--section', default=DEFAULT_SECTION, help='Credentials section (default: default)')
    header_parser.add_argument('--method', default='GET', help='HTTP method (default: GET)')
    header_parser.add_argument('--path', required=True, help='Request path including query string')
    header_parser.add_argument(
        '--header',
        action='append',
        default=[],
        metavar='NAME:VALUE',
        help='Header set on the request (repeatable)'
    )
    header_parser.add_argument(
        '--sign-header',
        action='append',
        default=[],
        metavar='NAME',
        help='Header name to include in the signature (repeatable, in order)'
    )
    header_parser.add_argument('--body', help='Request body')
    header_parser.add_argument(
        '--show-canonical',
        action='store_true',
        help='Also print the canonical request that was signed'
    )


def setup_sections_parser(subparsers):
    """Setup sections subcommand."""
    subparsers.add_parser('sections', help='List sections in the .edgerc file')


def parse_header_arguments(values: List[str]) -> Dict[str, str]:
    """
    Parse ``NAME:VALUE`` header arguments.

    Raises:
        ValueError: If an argument has no ``:``
    """
    headers = {}
    for value in values:
        name, sep, header_value = value.partition(':')
        if not sep or not name.strip():
            raise ValueError(f"Invalid header '{value}', expected NAME:VALUE")
        headers[name.strip()] = header_value.strip()
    return headers


def handle_header_command(args, store: CredentialStore) -> int:
    """Handle header command."""
    try:
        headers = parse_header_arguments(args.header)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    credentials = store.get(args.section)
    descriptor = RequestDescriptor(
        method=args.method,
        path=args.path,
        host=credentials.host,
        headers_to_sign=args.sign_header,
        headers=headers,
        body=args.body
    )

    context = EG1Signer().sign_with_context(descriptor, credentials)
    logger.debug(f"Signed {descriptor.method.upper()} {descriptor.path} for section '{args.section}'")

    if args.show_canonical:
        print(repr(context.canonical_request))
    print(f"Authorization: {context.authorization}")
    return 0


def handle_sections_command(args, store: CredentialStore) -> int:
    """Handle sections command."""
    for section in store.sections():
        print(section)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    if args.command is None:
        parser.print_help()
        return 1

    store = CredentialStore.from_file(resolve_edgerc_path(args.edgerc))

    try:
        if args.command == 'header':
            return handle_header_command(args, store)
        return handle_sections_command(args, store)
    except EdgeGridSDKError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
