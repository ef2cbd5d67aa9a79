"""Formatting and budgeting of document context."""

from contextpack.context.assembler import (
    ASSEMBLY_OVERHEAD,
    DEFAULT_MAX_TOKENS_PER_DOC,
    DEFAULT_MAX_TOTAL_TOKENS,
    assemble_all,
    validate_budget,
)
from contextpack.context.formatter import format_document

__all__ = [
    "ASSEMBLY_OVERHEAD",
    "DEFAULT_MAX_TOKENS_PER_DOC",
    "DEFAULT_MAX_TOTAL_TOKENS",
    "assemble_all",
    "format_document",
    "validate_budget",
]
