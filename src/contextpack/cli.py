"""CLI entry point for ContextPack."""

import argparse
import asyncio
import logging
import mimetypes
import sys
from dataclasses import replace
from pathlib import Path

from contextpack.config import Config
from contextpack.models import UploadedFile
from contextpack.service import ContextService
from contextpack.utils.formatting import format_file_size, format_number

logger = logging.getLogger(__name__)


def ingest(service: ContextService, paths: list[str]) -> int:
    """Ingest files into the store.

    Args:
        service: Service bound to the target store
        paths: Files to ingest, in order

    Returns:
        Process exit code: 0 if at least one file succeeded
    """
    uploads = []
    for path_str in paths:
        path = Path(path_str)
        if not path.is_file():
            logger.error(f"Not a file: {path_str}")
            continue
        file_type, _ = mimetypes.guess_type(path.name)
        uploads.append(
            UploadedFile(file_name=path.name, data=path.read_bytes(), file_type=file_type or "")
        )

    if not uploads:
        logger.error("No files to ingest")
        return 1

    report = asyncio.run(service.ingest_batch(uploads))

    for doc in report.documents:
        logger.info(f"  {doc.file_name}: {doc.chunk_count} chunks, {doc.total_tokens} tokens")
    for failed in report.failed_files:
        logger.error(f"  {failed['name']}: {failed['error']}")

    logger.info("")
    logger.info(f"Processed {report.success_count} of {len(uploads)} documents")
    return 0 if report.success_count else 1


def list_documents(service: ContextService) -> None:
    """Print one line per stored document."""
    documents = asyncio.run(service.get_documents())
    if not documents:
        print("No documents stored")
        return

    for doc in documents:
        pages = doc.num_pages if doc.num_pages is not None else "-"
        print(
            f"{doc.id:>5}  {doc.file_name:<40} {format_file_size(doc.file_size):>10}"
            f"  {pages:>5} pages  {format_number(doc.total_tokens):>9} tokens"
        )


def context(service: ContextService, max_total_tokens: int, max_tokens_per_doc: int) -> None:
    """Print the context block an AI request would receive."""
    text = asyncio.run(
        service.build_context(
            max_total_tokens=max_total_tokens,
            max_tokens_per_doc=max_tokens_per_doc,
        )
    )
    if not text:
        logger.info("No documents available")
        return
    print(text)


def info(service: ContextService, db_path: str) -> None:
    """Show a summary of the store."""
    summary = asyncio.run(service.get_summary())

    print(f"Store: {db_path}")
    print(f"")
    print(f"Contents:")
    print(f"  Documents: {summary.count}")
    print(f"  Pages: {format_number(summary.total_pages)}")
    print(f"  Estimated tokens: {format_number(summary.total_tokens)}")
    print(f"  Types: {', '.join(summary.types) or '-'}")


def delete(service: ContextService, doc_id: int) -> None:
    asyncio.run(service.delete_document(doc_id))
    logger.info(f"Deleted document {doc_id}")


def serve(service: ContextService, transport: str = "stdio") -> None:
    """Start the MCP server over the store.

    Args:
        service: Service shared by every tool call
        transport: Transport protocol (stdio or sse)
    """
    # Import here to avoid loading MCP unless needed
    from contextpack.server import create_mcp_server

    from typing import cast, Literal

    logger.info(f"Serving documents via {transport}")
    mcp = create_mcp_server(service)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def build_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contextpack",
        description="ContextPack - token-bounded document context for AI requests",
    )
    parser.add_argument(
        "--db",
        default=config.db_path,
        help=f"Document store path (default: {config.db_path})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ingest command
    ingest_parser = subparsers.add_parser("ingest", help="Extract, chunk and store files")
    ingest_parser.add_argument("files", nargs="+", help="PDF or text files")

    # list command
    subparsers.add_parser("list", help="List stored documents")

    # context command
    context_parser = subparsers.add_parser(
        "context",
        help="Print the document context for an AI request",
    )
    context_parser.add_argument(
        "--max-total-tokens",
        type=int,
        default=config.max_total_tokens,
        help=f"Budget for all documents (default: {config.max_total_tokens})",
    )
    context_parser.add_argument(
        "--max-tokens-per-doc",
        type=int,
        default=config.max_tokens_per_doc,
        help=f"Budget for each document (default: {config.max_tokens_per_doc})",
    )

    # info command
    subparsers.add_parser("info", help="Show a summary of the store")

    # delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a stored document")
    delete_parser.add_argument("id", type=int, help="Document id (see list)")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Start MCP server for the store")
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )

    return parser


def main() -> None:
    """Main CLI entry point."""
    config = Config.from_env()
    args = build_parser(config).parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    if args.command != "ingest" and not Path(args.db).exists():
        logger.error(f"Document store not found: {args.db}")
        sys.exit(1)

    service = ContextService.from_config(replace(config, db_path=args.db))

    if args.command == "ingest":
        sys.exit(ingest(service, args.files))
    elif args.command == "list":
        list_documents(service)
    elif args.command == "context":
        context(service, args.max_total_tokens, args.max_tokens_per_doc)
    elif args.command == "info":
        info(service, args.db)
    elif args.command == "delete":
        delete(service, args.id)
    elif args.command == "serve":
        serve(service, args.transport)


if __name__ == "__main__":
    main()
