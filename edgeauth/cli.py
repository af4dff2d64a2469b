"""
EdgeAuth Command Line Interface.

Generates an HMAC-signed edge authorization token and prints it on stdout.

Exit codes:
    0  token printed
    1  invalid command line
    2  invalid token inputs (mode, key, times, algorithm)
"""

import argparse
import logging
import sys
from typing import List, Optional

from edgeauth import __version__, config
from edgeauth.errors import EdgeAuthError
from edgeauth.signer import Signer

EXIT_USAGE = 1
EXIT_INVALID = 2


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s'
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger('edgeauth').setLevel(level)


def build_parser() -> ArgumentParser:
    """Build the argument parser; defaults come from the environment."""
    parser = ArgumentParser(
        prog='edgeauth',
        description='Generate an HMAC-signed edge authorization token'
    )
    env_key = config.get_key()
    parser.add_argument('-k', '--key', default=env_key, required=env_key is None,
                        help=f'Shared secret in hex (env: {config.KEY_ENV_VAR})')
    parser.add_argument('-d', '--duration', help='Token TTL (e.g. 300s, 15m, 1h)')
    parser.add_argument('--acl', action='append',
                        help='ACL string (e.g. /*). Repeat, or use the ACL delimiter, '
                             'to join multiple patterns')
    parser.add_argument('--url', help='Single URL path to authorize (e.g. /path/file)')
    parser.add_argument('--ip', help='Bind token to client IP')
    parser.add_argument('--id', dest='session_id', help='Session ID')
    parser.add_argument('--data', help='Arbitrary payload')
    parser.add_argument('--salt', help='Additional salt (added only to the signed string)')
    parser.add_argument('--start', type=int, default=0,
                        help='Explicit start time (unix epoch)')
    parser.add_argument('--exp', type=int, default=0,
                        help='Explicit expiration time (unix epoch). Overrides --duration')
    parser.add_argument('--algo', default=config.DEFAULT_ALGORITHM,
                        choices=['sha256', 'sha1', 'md5'], help='HMAC algorithm')
    parser.add_argument('--field-delim', default=config.DEFAULT_FIELD_DELIMITER,
                        help='Field delimiter')
    parser.add_argument('--acl-delim', default=config.DEFAULT_ACL_DELIMITER,
                        help='ACL delimiter for multiple ACL entries')
    parser.add_argument('--escape-early', action='store_true',
                        help='URL-encode certain fields before signing '
                             '(ip, id, data and url when URL mode)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def write_token(token: str) -> None:
    """Write the token to stdout as the bytes it was signed over."""
    sys.stdout.flush()
    sys.stdout.buffer.write(token.encode('utf-8', 'surrogateescape') + b'\n')
    sys.stdout.buffer.flush()


def cmd_generate(args: argparse.Namespace) -> int:
    """Sign a token from parsed arguments and print it."""
    try:
        signer = Signer(
            key=args.key,
            algorithm=args.algo,
            field_delimiter=args.field_delim,
            acl_delimiter=args.acl_delim,
            escape_early=args.escape_early,
            salt=args.salt,
        )
        signed = signer.sign(
            acl=args.acl,
            url=args.url,
            ip=args.ip,
            session_id=args.session_id,
            data=args.data,
            start_time=args.start,
            expire_time=args.exp,
            duration=args.duration,
        )
    except EdgeAuthError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID

    write_token(signed.token)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return e.code

    setup_logging(args.verbose)
    return cmd_generate(args)


if __name__ == '__main__':
    sys.exit(main())
