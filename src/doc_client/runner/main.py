"""
CLI main entry point.
"""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any

from ..config import create_default_config, load_config
from ..document_client import DocumentServiceClient
from ..errors import DocClientError, ServiceError
from ..models import ListParams, QueryParams, ReadParams, RegisterParams, RegisterResult

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_cli() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="doc-client",
        description="Register, publish, inspect and list documents in the DOC service",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("init-config", help="Write a default config file")

    # register command
    register_parser = subparsers.add_parser("register", help="Register a new document")
    register_parser.add_argument("--title", required=True, help="Document title")
    register_parser.add_argument(
        "--format", required=True, help="Source format (e.g., pdf, doc, docx, ppt, txt)"
    )
    register_parser.add_argument("--target-type", help="Conversion target (e.g., h5, image)")
    register_parser.add_argument("--notification", help="Notification name to trigger")

    publish_parser = subparsers.add_parser("publish", help="Publish a registered document")
    publish_parser.add_argument("document_id", help="Document ID")

    # query command
    query_parser = subparsers.add_parser("query", help="Show a document's status")
    query_parser.add_argument("document_id", help="Document ID")
    query_parser.add_argument(
        "--https",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Request an HTTPS (or HTTP) cover URL; omitted unless given",
    )

    # read command
    read_parser = subparsers.add_parser("read", help="Get a read token for a document")
    read_parser.add_argument("document_id", help="Document ID")
    read_parser.add_argument(
        "--expire-in-seconds",
        type=int,
        default=None,
        help="Token lifetime in seconds (service default if omitted)",
    )

    images_parser = subparsers.add_parser("images", help="List converted page images")
    images_parser.add_argument("document_id", help="Document ID")

    delete_parser = subparsers.add_parser("delete", help="Delete a document")
    delete_parser.add_argument("document_id", help="Document ID")

    # list command
    list_parser = subparsers.add_parser("list", help="List documents")
    list_parser.add_argument("--status", default=None, help="Filter by status")
    list_parser.add_argument("--marker", default="", help="Pagination marker to start from")
    list_parser.add_argument(
        "--max-size", type=int, default=0, help="Page size (0 = service default)"
    )
    list_parser.add_argument(
        "--all",
        action="store_true",
        help="Follow pagination markers and print every document",
    )

    return parser


def _to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        result = {f.name: _to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
        if isinstance(value, RegisterResult):
            result["location"] = value.location
        return result
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    return value


def _print_json(value: Any) -> None:
    print(json.dumps(_to_jsonable(value), indent=2, ensure_ascii=False))


def cmd_init_config(config_path: Path) -> int:
    """Write a default config file unless one exists."""
    if config_path.exists():
        print(f"Config file already exists: {config_path}")
        return 1
    create_default_config(config_path)
    print(f"✓ Wrote default config to {config_path}")
    return 0


def cmd_register(
    client: DocumentServiceClient,
    title: str,
    format: str,
    target_type: str | None = None,
    notification: str | None = None,
) -> int:
    """Register a document and print its id and upload location."""
    result = client.register_document(
        RegisterParams(
            title=title,
            format=format,
            target_type=target_type,
            notification=notification,
        )
    )
    _print_json(result)
    return 0


def cmd_publish(client: DocumentServiceClient, document_id: str) -> int:
    client.publish_document(document_id)
    print(f"✓ Published {document_id}")
    return 0


def cmd_query(
    client: DocumentServiceClient, document_id: str, https: bool | None = None
) -> int:
    params = QueryParams(use_https=https) if https is not None else None
    _print_json(client.query_document(document_id, params))
    return 0


def cmd_read(
    client: DocumentServiceClient, document_id: str, expire_in_seconds: int | None = None
) -> int:
    params = ReadParams(expire_in_seconds) if expire_in_seconds is not None else None
    _print_json(client.read_document(document_id, params))
    return 0


def cmd_images(client: DocumentServiceClient, document_id: str) -> int:
    for url in client.get_images(document_id).images:
        print(url)
    return 0


def cmd_delete(client: DocumentServiceClient, document_id: str) -> int:
    client.delete_document(document_id)
    print(f"✓ Deleted {document_id}")
    return 0


def cmd_list(
    client: DocumentServiceClient,
    status: str | None = None,
    marker: str = "",
    max_size: int = 0,
    follow: bool = False,
) -> int:
    """List documents, one page or all of them."""
    params = ListParams(status=status or None, marker=marker, max_size=max_size)

    if follow:
        count = 0
        for doc in client.iter_documents(params):
            print(f"  📄 [{doc.document_id}] {doc.status or '-'} {doc.title or ''}".rstrip())
            count += 1
        print(f"\n✓ Found {count} document(s)")
        return 0

    page = client.list_documents(params)
    _print_json(page)
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_cli()
    parsed = parser.parse_args(args)

    setup_logging(parsed.verbose)

    if not parsed.command:
        parser.print_help()
        return 1

    if parsed.command == "init-config":
        return cmd_init_config(parsed.config)

    # Load config
    try:
        config = load_config(parsed.config)
    except (DocClientError, OSError) as e:
        print(f"❌ Failed to load config: {e}")
        return 1

    with DocumentServiceClient.from_config(config) as client:
        return _dispatch(parser, parsed, client)


def _dispatch(parser: argparse.ArgumentParser, parsed: argparse.Namespace, client: DocumentServiceClient) -> int:
    """Route to command."""
    try:
        if parsed.command == "register":
            return cmd_register(
                client,
                parsed.title,
                parsed.format,
                target_type=parsed.target_type,
                notification=parsed.notification,
            )
        elif parsed.command == "publish":
            return cmd_publish(client, parsed.document_id)
        elif parsed.command == "query":
            return cmd_query(client, parsed.document_id, parsed.https)
        elif parsed.command == "read":
            return cmd_read(client, parsed.document_id, parsed.expire_in_seconds)
        elif parsed.command == "images":
            return cmd_images(client, parsed.document_id)
        elif parsed.command == "delete":
            return cmd_delete(client, parsed.document_id)
        elif parsed.command == "list":
            return cmd_list(
                client,
                status=parsed.status,
                marker=parsed.marker,
                max_size=parsed.max_size,
                follow=parsed.all,
            )
        else:
            parser.print_help()
            return 1
    except ServiceError as e:
        print(f"❌ {e.code}: {e.message}")
        if e.request_id:
            print(f"   Request ID: {e.request_id}")
        return 1
    except DocClientError as e:
        print(f"❌ {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
