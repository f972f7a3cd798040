"""
Token count heuristic.

Character-based estimate used for chunk budgets and embedding usage
reporting. Kept behind a single function so a real tokenizer can replace it
without changing configured budgets.

Dependencies: re, math (stdlib)
System role: Token budgeting for the chunker and embedding service
"""

import math
import re

_DIGIT_RUN = re.compile(r"\d+")
_ACRONYM_RUN = re.compile(r"[A-Z]{2,}")


def estimate_token_count(text: str) -> int:
    """
    Estimate the number of tokens in text.

    Starts from one token per four characters and adds 20% when digit runs
    are dense and 10% when acronym runs are dense (each more than a tenth of
    the base estimate).

    Args:
        text: Text to estimate

    Returns:
        int: Estimated token count (0 for empty text)
    """
    if not text:
        return 0

    base = math.ceil(len(text) / 4)
    # Factor kept in tenths so 1.3 never becomes 1.3000000000000003
    factor_tenths = 10
    if len(_DIGIT_RUN.findall(text)) > base * 0.1:
        factor_tenths += 2
    if len(_ACRONYM_RUN.findall(text)) > base * 0.1:
        factor_tenths += 1

    return -(-base * factor_tenths // 10)
