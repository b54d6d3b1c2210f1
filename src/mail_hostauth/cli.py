"""CLI entry point for encoding, decoding and inspecting connection strings."""

import argparse
import logging
import sys

import structlog
import yaml

from mail_hostauth.config import get_settings_eager
from mail_hostauth.credentials import EnvCredentialBackend
from mail_hostauth.descriptor import ConnectionDescriptor
from mail_hostauth.exceptions import HostAuthError
from mail_hostauth.flags import PORT_UNKNOWN, SecurityFlag, describe_flags
from mail_hostauth.ports import resolve_default_port
from mail_hostauth.service import ConnectionService
from mail_hostauth.uri import decode, encode

MASKED_PASSWORD = "********"


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    _configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        return args.handler(args)
    except HostAuthError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hostauth",
        description="Encode, decode and inspect mail server connection strings",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    encode_parser = subparsers.add_parser("encode", help="Build a connection string from fields")
    encode_parser.add_argument("--protocol", required=True, help="Protocol (imap, pop3, smtp, eas)")
    encode_parser.add_argument("--host", required=True, help="Server host name or IP address")
    encode_parser.add_argument(
        "--port",
        type=int,
        default=PORT_UNKNOWN,
        help="Server port (default: inferred from protocol and security)",
    )
    security = encode_parser.add_mutually_exclusive_group()
    security.add_argument("--ssl", action="store_true", help="Use SSL")
    security.add_argument("--tls", action="store_true", help="Use TLS")
    encode_parser.add_argument(
        "--trust-all", action="store_true", help="Trust all certificates (requires --ssl or --tls)"
    )
    encode_parser.add_argument("--login", help="User name")
    encode_parser.add_argument("--password", help="Password")
    encode_parser.add_argument("--domain", help="Path suffix, e.g. an EAS mailbox path")
    encode_parser.set_defaults(handler=_handle_encode)

    decode_parser = subparsers.add_parser("decode", help="Show the fields of a connection string")
    decode_parser.add_argument("connection", help="Connection string")
    decode_parser.add_argument(
        "--show-password", action="store_true", help="Print the password instead of masking it"
    )
    decode_parser.set_defaults(handler=_handle_decode)

    port_parser = subparsers.add_parser("port", help="Show the default port for a protocol")
    port_parser.add_argument("protocol", help="Protocol (imap, pop3, smtp, eas)")
    port_parser.add_argument("--ssl", action="store_true", help="Use the SSL port")
    port_parser.set_defaults(handler=_handle_port)

    subparsers.add_parser("list", help="List configured connections").set_defaults(
        handler=_handle_list
    )

    show_parser = subparsers.add_parser("show", help="Show a configured connection")
    show_parser.add_argument("connection_id", help="Connection ID from the config file")
    show_parser.add_argument(
        "--show-password", action="store_true", help="Print the password instead of masking it"
    )
    show_parser.set_defaults(handler=_handle_show)

    return parser


def _configure_logging(level: int) -> None:
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", force=True)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def _handle_encode(args: argparse.Namespace) -> int:
    flags = SecurityFlag.NONE
    if args.ssl:
        flags |= SecurityFlag.SSL
    elif args.tls:
        flags |= SecurityFlag.TLS
    if args.trust_all:
        flags |= SecurityFlag.TRUST_ALL

    descriptor = ConnectionDescriptor()
    descriptor.set_connection(args.protocol, args.host, args.port, flags)
    if args.login is not None:
        descriptor.set_login(args.login, args.password)
    descriptor.domain = args.domain

    print(encode(descriptor))
    return 0


def _handle_decode(args: argparse.Namespace) -> int:
    descriptor = decode(args.connection)
    print(_dump_descriptor(descriptor, show_password=args.show_password), end="")
    return 0


def _handle_port(args: argparse.Namespace) -> int:
    port = resolve_default_port(args.protocol, args.ssl)
    if port is None:
        print(f"No default port for protocol '{args.protocol}'", file=sys.stderr)
        return 1
    print(port)
    return 0


def _handle_list(args: argparse.Namespace) -> int:
    service = _load_service(args)
    connection_ids = service.list_connections()
    if not connection_ids:
        print("No connections configured")
        return 0
    for connection_id in connection_ids:
        descriptor = decode(service.get_config(connection_id).connection)
        print(f"{connection_id}: {descriptor.protocol}://{descriptor.address}:{descriptor.port}")
    return 0


def _handle_show(args: argparse.Namespace) -> int:
    service = _load_service(args)
    descriptor = service.get_descriptor(args.connection_id)
    print(_dump_descriptor(descriptor, show_password=args.show_password), end="")
    return 0


def _load_service(args: argparse.Namespace) -> ConnectionService:
    settings = get_settings_eager()
    if not args.verbose:
        _configure_logging(logging.getLevelName(settings.log_level))
    return ConnectionService(settings.connections, EnvCredentialBackend())


def _dump_descriptor(descriptor: ConnectionDescriptor, show_password: bool) -> str:
    row = descriptor.as_row()
    del row["id"]
    if row["password"] is not None and not show_password:
        row["password"] = MASKED_PASSWORD
    row["flags"] = describe_flags(descriptor.flags)
    return yaml.safe_dump(row, sort_keys=False)


if __name__ == "__main__":
    sys.exit(main())
