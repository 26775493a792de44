from typing import Dict, Optional
import numpy as np


def weighted_sample(
    frequencies: Dict[str, int],
    n: int,
    rng: Optional[np.random.Generator] = None,
) -> Dict[str, int]:
    """
    Pick up to n distinct terms, each with probability proportional to its count.

    Draws are made with replacement and repeats are thrown away until enough
    distinct terms are held, so this only approximates sampling without
    replacement and gets slow as n approaches the vocabulary size.
    Returns {term: count} for the chosen terms.
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    picked: Dict[str, int] = {}
    if not frequencies or n == 0:
        return picked

    rng = rng if rng is not None else np.random.default_rng()
    terms = list(frequencies.keys())
    weights = np.fromiter(frequencies.values(), dtype=np.float64, count=len(terms))
    probs = weights / weights.sum()

    target = min(n, len(terms))
    while len(picked) < target:
        # draw a batch at a time; each draw is still independent
        for i in rng.choice(len(terms), size=target - len(picked), p=probs):
            term = terms[i]
            picked[term] = frequencies[term]
            if len(picked) == target:
                break
    return picked
