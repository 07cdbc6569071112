"""Token estimation for assembled context.

All token estimates must go through this module so that the context
budget logic and provider bookkeeping agree on the same numbers.

The estimate is a coarse character heuristic (about four characters per
token for English text), not a tokenizer. It is deterministic: the same
text always yields the same count.
"""

import math

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Estimate the number of tokens in a piece of text.

    Args:
        text: Text to measure

    Returns:
        ceil(len(text) / 4); 0 for an empty string
    """
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)
