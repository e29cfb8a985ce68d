#!/usr/bin/env python3

import socket, sys, argparse
from urllib.parse import urlparse
from contextlib import closing
from typing import NamedTuple, Optional

__version__ = "0.1.0"

DEFAULT_PORT = "80"
BUFFER_SIZE = 1024


class FetchError(Exception):
    """Base class for every failure of a fetch"""


class MalformedURLError(FetchError, ValueError):
    pass


class ConnectError(FetchError):
    pass


class ReadError(FetchError):
    pass


class RequestTarget(NamedTuple):
    host: str
    port: str
    path: str


class FetchResult(NamedTuple):
    response: Optional[bytes] = None
    error: Optional[FetchError] = None

    @property
    def ok(self):
        return self.error is None


def resolve_url(url):
    """Split a URL into host, port and path.

    The port falls back to 80 whenever the URL omits one, whatever the scheme.
    """
    if "://" not in url:
        raise MalformedURLError(f"missing scheme in {url!r}")

    try:
        parsed = urlparse(url)
        port = parsed.port
    except ValueError as e:
        raise MalformedURLError(f"cannot parse {url!r}: {e}") from e

    if not parsed.scheme or not parsed.hostname:
        raise MalformedURLError(f"missing host in {url!r}")

    return RequestTarget(parsed.hostname,
                         DEFAULT_PORT if port is None else str(port),
                         parsed.path or '/')


def format_request(target):
    return f"GET {target.path} HTTP/1.0\r\nHost: {target.host}\r\n\r\n".encode()


def exchange(target, bufsize=BUFFER_SIZE):
    """Send one GET and return at most bufsize bytes of the reply"""
    try:
        conn = socket.create_connection((target.host, int(target.port)))
    # getaddrinfo raises UnicodeError for host labels IDNA cannot encode
    except (OSError, UnicodeError) as e:
        raise ConnectError(f"cannot connect to {target.host}:{target.port}: {e}") from e

    with closing(conn) as s:
        try:
            s.sendall(format_request(target))
        except OSError as e:
            raise ConnectError(f"connection to {target.host}:{target.port} lost: {e}") from e

        # Single read: anything past bufsize is dropped
        try:
            return s.recv(bufsize)
        except OSError as e:
            raise ReadError(f"read from {target.host}:{target.port} failed: {e}") from e


def fetch(url, verbose=False):
    try:
        target = resolve_url(url)
        if verbose:
            print(f"Host: {target.host}", file=sys.stderr)
            print(f"Port: {target.port}", file=sys.stderr)
            print(f"Path: {target.path}", file=sys.stderr)
        return FetchResult(response=exchange(target))
    except FetchError as e:
        return FetchResult(error=e)


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that exits with status 1 on bad usage"""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser():
    parser = ArgumentParser(prog="build-your-own-curl",
                            description="Raw HTTP/1.0 GET client")
    parser.add_argument('url', help='URL to fetch')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print the resolved host, port and path to stderr')
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    result = fetch(args.url, verbose=args.verbose)
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    print(result.response.decode('utf-8', errors='replace'))
    return 0


if __name__ == "__main__":
    sys.exit(main())
