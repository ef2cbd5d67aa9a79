"""Token count estimation.

This is a heuristic, not a tokenizer: roughly four characters per token for
GPT-style vocabularies. Every budget in the pipeline (chunk bounds, per
document limits, the overall context ceiling) is measured with this one
function so that its errors stay consistent instead of compounding.
"""

import math
from typing import Optional

CHARS_PER_TOKEN = 4


def estimate_tokens(text: Optional[str]) -> int:
    """Estimate how many tokens ``text`` would use.

    Returns 0 for None or an empty string.
    """
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def chars_for_tokens(tokens: int) -> int:
    """Inverse of the estimate: characters that fit in ``tokens``."""
    return tokens * CHARS_PER_TOKEN
