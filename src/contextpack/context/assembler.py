"""Combine formatted documents under a global token budget."""

import logging
import math
from typing import Any, Iterable

from contextpack.context.formatter import format_document
from contextpack.errors import FormattingError, ValidationError
from contextpack.utils.tokens import chars_for_tokens, estimate_tokens

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOTAL_TOKENS = 10000
DEFAULT_MAX_TOKENS_PER_DOC = 3000

OPEN_TAG = "<documents>\n"
CLOSE_TAG = "\n</documents>"
OVERFLOW_MARKER = "\n... [additional documents truncated]"

# Characters the outer wrapper can add beyond the token budget
ASSEMBLY_OVERHEAD = len(OPEN_TAG) + len(OVERFLOW_MARKER) + len(CLOSE_TAG)


def validate_budget(value: Any, name: str) -> int:
    """Check that a token budget is a finite number of at least 1.

    Raises:
        ValidationError: for non-numeric, non-finite or sub-1 values
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value < 1:
        raise ValidationError(f"{name} must be at least 1, got {value!r}")
    return int(value)


def _budget_or_default(value: Any, name: str, default: int) -> int:
    try:
        return validate_budget(value, name)
    except ValidationError as err:
        logger.warning(f"{err}; using default {default}")
        return default


def assemble_all(
    documents: Iterable[Any],
    max_total_tokens: Any = DEFAULT_MAX_TOTAL_TOKENS,
    max_tokens_per_doc: Any = DEFAULT_MAX_TOKENS_PER_DOC,
) -> str:
    """Format every document and join them into one context block.

    Each document gets an equal share of ``max_total_tokens``, capped at
    ``max_tokens_per_doc``. Documents that fail to format are skipped.

    Args:
        documents: Documents (or serialized document mappings)
        max_total_tokens: Ceiling for the combined context
        max_tokens_per_doc: Ceiling for any one document

    Returns:
        ``<documents>...</documents>``, or "" when nothing could be formatted
    """
    max_total_tokens = _budget_or_default(
        max_total_tokens, "max_total_tokens", DEFAULT_MAX_TOTAL_TOKENS
    )
    max_tokens_per_doc = _budget_or_default(
        max_tokens_per_doc, "max_tokens_per_doc", DEFAULT_MAX_TOKENS_PER_DOC
    )

    documents = list(documents)
    if not documents:
        logger.info("No documents available for context")
        return ""

    per_doc_budget = min(max_tokens_per_doc, max_total_tokens // len(documents))
    # More documents than tokens: everyone still gets a minimal slice
    per_doc_budget = max(per_doc_budget, 1)
    logger.info(
        f"Formatting {len(documents)} document(s) for AI context"
        f" ({per_doc_budget} tokens each)"
    )

    blocks = []
    for doc in documents:
        try:
            block = format_document(doc, per_doc_budget)
        except FormattingError as err:
            logger.warning(f"Skipping document: {err}")
            continue
        if block:
            blocks.append(block)

    if not blocks:
        logger.info("No documents could be formatted")
        return ""

    combined = "\n\n".join(blocks)
    total_tokens = estimate_tokens(combined)

    if total_tokens > max_total_tokens:
        logger.warning(
            f"Documents exceed max tokens ({total_tokens} > {max_total_tokens}), truncating"
        )
        truncated = combined[: chars_for_tokens(max_total_tokens)]
        return f"{OPEN_TAG}{truncated}{OVERFLOW_MARKER}{CLOSE_TAG}"

    logger.info(f"Formatted {len(blocks)} document(s) ({total_tokens} estimated tokens)")
    return f"{OPEN_TAG}{combined}{CLOSE_TAG}"
