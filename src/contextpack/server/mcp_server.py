"""FastMCP server implementation for ContextPack."""

import mimetypes
from pathlib import Path
from typing import Optional

from mcp.server.fastmcp import FastMCP

from contextpack.models import UploadedFile
from contextpack.service import ContextService
from contextpack.utils.formatting import format_file_size, format_number


def create_mcp_server(service: ContextService) -> FastMCP:
    """Create an MCP server over one ContextService.

    Design: 1 process = 1 service, so all tools share one document cache.

    Args:
        service: The service whose documents are exposed

    Returns:
        Configured FastMCP server instance
    """
    mcp = FastMCP(
        name="contextpack",
    )

    @mcp.tool()
    async def list_documents(refresh: bool = False) -> str:
        """List the stored documents.

        Args:
            refresh: Re-read the store instead of using the cached list

        Returns:
            One line per document with size, pages and estimated tokens
        """
        documents = await service.get_documents(force_refresh=refresh)
        if not documents:
            return "No documents stored"

        lines = []
        for doc in documents:
            pages = doc.num_pages if doc.num_pages is not None else "-"
            lines.append(
                f"[{doc.id}] {doc.file_name:<50} {format_file_size(doc.file_size):>10}"
                f"  {pages} pages  {format_number(doc.total_tokens)} tokens"
            )
        return "\n".join(lines)

    @mcp.tool()
    async def document_context(
        max_total_tokens: Optional[int] = None,
        max_tokens_per_doc: Optional[int] = None,
    ) -> str:
        """Return the stored documents formatted as context for a prompt.

        Every document receives an equal share of the budget; long documents
        are truncated.

        Args:
            max_total_tokens: Budget for all documents combined (server default if omitted)
            max_tokens_per_doc: Budget for any single document (server default if omitted)

        Returns:
            A <documents> block, or a notice when nothing is stored
        """
        text = await service.build_context(
            max_total_tokens=max_total_tokens,
            max_tokens_per_doc=max_tokens_per_doc,
        )
        return text or "No documents available"

    @mcp.tool()
    async def document_summary() -> str:
        """Summarize the stored documents without their text."""
        summary = await service.get_summary()
        return (
            f"Documents: {summary.count}\n"
            f"Pages: {format_number(summary.total_pages)}\n"
            f"Estimated tokens: {format_number(summary.total_tokens)}\n"
            f"Types: {', '.join(summary.types) or '-'}\n"
            f"Files: {', '.join(summary.file_names) or '-'}"
        )

    @mcp.tool()
    async def ingest_file(path: str) -> str:
        """Extract, chunk and store a local PDF or text file.

        Args:
            path: Path to the file on the server's filesystem

        Returns:
            What was stored, or why the file was rejected
        """
        file_path = Path(path)
        if not file_path.is_file():
            return f"Error: File not found: {path}"

        file_type, _ = mimetypes.guess_type(file_path.name)
        upload = UploadedFile(
            file_name=file_path.name,
            data=file_path.read_bytes(),
            file_type=file_type or "",
        )
        report = await service.ingest_batch([upload])

        if report.failed_files:
            return f"Error: {report.failed_files[0]['error']}"
        doc = report.documents[0]
        return f"Stored {doc.file_name} as [{doc.id}]: {doc.chunk_count} chunks, {doc.total_tokens} tokens"

    return mcp
