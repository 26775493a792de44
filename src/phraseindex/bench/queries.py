from enum import Enum
from typing import Dict, List, Optional
import numpy as np

# Mix of very common and fairly rare English words
FIXED_DICTIONARY = ["The", "quantity", "respectable", "she", "announced"]


class QuerySource(Enum):
    FIXED = "fixed"        # distinct words from FIXED_DICTIONARY
    SAMPLED = "sampled"    # words drawn from the index's own term distribution


def _check_args(num_queries: int, max_tokens: int) -> None:
    if num_queries < 0:
        raise ValueError(f"num_queries must be >= 0, got {num_queries}")
    if max_tokens < 1:
        raise ValueError(f"max_tokens must be >= 1, got {max_tokens}")


def generate_queries_from_fixed_dictionary(
    num_queries: int,
    max_tokens: int,
    rng: Optional[np.random.Generator] = None,
) -> List[str]:
    """Queries of 1..max_tokens distinct dictionary words (never more than the dictionary holds)."""
    _check_args(num_queries, max_tokens)
    rng = rng if rng is not None else np.random.default_rng()
    queries: List[str] = []
    for _ in range(num_queries):
        length = min(int(rng.integers(1, max_tokens + 1)), len(FIXED_DICTIONARY))
        picks = rng.choice(len(FIXED_DICTIONARY), size=length, replace=False)
        queries.append(" ".join(FIXED_DICTIONARY[i] for i in picks))
    return queries


def generate_queries_from_distribution(
    num_queries: int,
    max_tokens: int,
    terms: Dict[str, int],
    rng: Optional[np.random.Generator] = None,
) -> List[str]:
    """Queries of 1..max_tokens words drawn with replacement, weighted by `terms` counts."""
    _check_args(num_queries, max_tokens)
    if not terms:
        return []
    rng = rng if rng is not None else np.random.default_rng()
    words = list(terms.keys())
    weights = np.fromiter(terms.values(), dtype=np.float64, count=len(words))
    probs = weights / weights.sum()

    queries: List[str] = []
    for _ in range(num_queries):
        length = int(rng.integers(1, max_tokens + 1))
        picks = rng.choice(len(words), size=length, p=probs)
        queries.append(" ".join(words[i] for i in picks))
    return queries
