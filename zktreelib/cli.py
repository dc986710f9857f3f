#!/usr/bin/env python
"""
Command-line front end for ZKTreeLib
====================================

Usage:
    zktree --servers zk1:2181,zk2:2181 ls /app
    zktree lsr /app
    zktree creater /app/config/db "primary" --acl world:anyone:cdrwa
    zktree deleter /app/tmp
    zktree setacl /app/secret "digest:alice:hash:cdrwa" --force

Servers default to $ZKTREE_SERVERS, then localhost:2181.
"""

import argparse
import logging
import os
import sys
from typing import BinaryIO, List, Optional, TextIO

from . import __version__
from .client import NamespaceClient
from .config import ClientConfig
from .core.session import SessionFactory
from .errors import ZKTreeError

logger = logging.getLogger(__name__)

SERVERS_ENV = "ZKTREE_SERVERS"
DEFAULT_SERVERS = "localhost:2181"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zktree",
        description="Inspect and manipulate a ZooKeeper-style namespace",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--servers", default=os.environ.get(SERVERS_ENV, DEFAULT_SERVERS),
                        help="comma-separated host[:port] list")
    parser.add_argument("--timeout", type=float, default=None,
                        help="connect timeout in seconds")
    parser.add_argument("--auth", metavar="SCHEME:CREDENTIAL",
                        help="authenticate sessions, e.g. digest:alice:secret")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    commands.required = True

    for name, help_text in (
        ("exists", "print true if the path exists"),
        ("get", "print the payload of a node"),
        ("ls", "list immediate children"),
        ("lsr", "list all descendants"),
        ("delete", "delete one node"),
        ("deleter", "delete a node and its subtree"),
        ("getacl", "print the ACL of a node"),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("path")

    for name, help_text in (
        ("set", "replace the payload of a node"),
        ("create", "create a node"),
        ("creater", "create a node and any missing ancestors"),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("path")
        sub.add_argument("data", nargs="?", default=None,
                         help="payload (read from stdin when omitted)")
        if name != "set":
            _add_create_options(sub)

    sub = commands.add_parser("setacl", help="replace the ACL of a node")
    sub.add_argument("path")
    sub.add_argument("acl_text", metavar="acl")
    sub.add_argument("--force", action="store_true",
                     help="create the node and missing ancestors if absent")

    return parser


def _add_create_options(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("--acl", default="",
                     help="ACL for created nodes, e.g. world:anyone:cdrwa")
    sub.add_argument("--force", action="store_true",
                     help="create missing ancestors")
    flags = sub.add_mutually_exclusive_group()
    flags.add_argument("--flags", type=int, default=None,
                       help="creation flags: 0 none, 1 ephemeral, 2 sequential")
    flags.add_argument("--ephemeral", action="store_true")
    flags.add_argument("--sequential", action="store_true")


def build_client(args: argparse.Namespace,
                 session_factory: Optional[SessionFactory] = None) -> NamespaceClient:
    """Turn parsed arguments into a configured client."""
    config = ClientConfig.from_servers_string(args.servers)
    if args.timeout is not None:
        config.timeout_seconds = args.timeout

    client = NamespaceClient(config, session_factory=session_factory)
    if args.auth:
        scheme, _, credential = args.auth.partition(":")
        client.set_auth(scheme, credential.encode("utf-8"))
    if getattr(args, "ephemeral", False):
        client.set_ephemeral()
    elif getattr(args, "sequential", False):
        client.set_sequential()
    elif getattr(args, "flags", None) is not None:
        client.set_flags(args.flags)
    return client


def _payload(args: argparse.Namespace, stdin: BinaryIO) -> bytes:
    if args.data is not None:
        return args.data.encode("utf-8")
    return stdin.read()


def run_command(client: NamespaceClient,
                args: argparse.Namespace,
                out: TextIO,
                stdin: BinaryIO) -> None:
    """Execute one parsed command against client, writing results to out."""
    command = args.command
    path = args.path

    if command == "exists":
        print("true" if client.exists(path) else "false", file=out)
    elif command == "get":
        print(client.get(path).decode("utf-8", errors="replace"), file=out)
    elif command == "ls":
        for child in sorted(client.children(path)):
            print(child, file=out)
    elif command == "lsr":
        for child in client.children_recursive(path):
            print(child, file=out)
    elif command == "set":
        client.set_data(path, _payload(args, stdin))
    elif command in ("create", "creater"):
        force = args.force or command == "creater"
        print(client.create(path, _payload(args, stdin), acl=args.acl, force=force), file=out)
    elif command == "delete":
        client.delete(path)
    elif command == "deleter":
        client.delete_recursive(path)
    elif command == "getacl":
        for line in client.get_acl_text(path):
            print(line, file=out)
    elif command == "setacl":
        print(client.set_acl(path, args.acl_text, force=args.force), file=out)
    else:
        raise ValueError(f"unknown command: {command}")


def main(argv: Optional[List[str]] = None,
         session_factory: Optional[SessionFactory] = None,
         out: Optional[TextIO] = None,
         stdin: Optional[BinaryIO] = None) -> int:
    """Entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    client = build_client(args, session_factory)
    errors = client.config.validate()
    if errors:
        print(f"zktree: invalid configuration: {'; '.join(errors)}", file=sys.stderr)
        return 2

    try:
        run_command(client, args, out or sys.stdout, stdin or sys.stdin.buffer)
    except ZKTreeError as e:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"zktree: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
