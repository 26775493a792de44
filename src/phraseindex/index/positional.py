from __future__ import annotations
import logging
from bisect import bisect_left, insort
from typing import Any, Dict, List, Optional

import numpy as np
from pydantic import ValidationError

from phraseindex.text.tokenize import tokenize
from phraseindex.index import sizes
from phraseindex.index.ordering import OrderedTerm, TokenOrdering, ordering_function, parse_ordering
from phraseindex.index.sampling import weighted_sample
from phraseindex.index.snapshot import IndexSnapshot

logger = logging.getLogger(__name__)

# term -> doc_id -> positions of the term in that doc
Postings = Dict[str, Dict[int, List[int]]]


def _contains(sorted_positions: List[int], value: int) -> bool:
    i = bisect_left(sorted_positions, value)
    return i < len(sorted_positions) and sorted_positions[i] == value


class PositionalInvertedIndex:
    """
    In-memory positional inverted index with exact phrase search.

    Not thread-safe: callers must serialize index_document() against every
    other call on the same instance.
    """

    def __init__(self, ordering: TokenOrdering | str = TokenOrdering.TOKEN_ORDER):
        self.postings: Postings = {}
        self.term_frequencies: Dict[str, int] = {}
        self.ordering = parse_ordering(ordering)

    def __len__(self) -> int:
        return len(self.postings)

    def __contains__(self, term: str) -> bool:
        return term in self.postings

    def __repr__(self) -> str:
        return f"PositionalInvertedIndex(terms={len(self.postings)}, ordering={self.ordering.value})"

    # -----------------------
    # Ingestion
    # -----------------------
    def index_document(self, doc_id: int, text: str) -> None:
        """
        Add every term of `text` under `doc_id`.

        Indexing an id that is already present adds its terms again: positions
        are merged into the existing entries (keeping them sorted) and the
        frequencies grow, nothing is replaced.
        """
        if isinstance(doc_id, bool) or not isinstance(doc_id, (int, np.integer)):
            raise TypeError(f"doc_id must be an int, got {type(doc_id).__name__}")
        if doc_id < 0:
            raise ValueError(f"doc_id must be >= 0, got {doc_id}")
        doc_id = int(doc_id)

        for pos, term in enumerate(tokenize(text)):
            positions = self.postings.setdefault(term, {}).setdefault(doc_id, [])
            if positions and positions[-1] > pos:
                # second pass over the same doc id
                insort(positions, pos)
            else:
                positions.append(pos)
            self.term_frequencies[term] = self.term_frequencies.get(term, 0) + 1

    def term_frequency(self, term: str) -> int:
        return self.term_frequencies.get(term, 0)

    # -----------------------
    # Search
    # -----------------------
    def order_terms(self, terms: List[str]) -> List[OrderedTerm]:
        return ordering_function(self.ordering)(terms, self.term_frequencies)

    def search(self, query: str) -> List[int]:
        """Return ids (ascending) of the documents containing `query` as a contiguous phrase."""
        if not query:
            return []
        ordered = self.order_terms(tokenize(query))
        if not ordered:
            return []

        # candidates: doc_id -> phrase start positions still in the running
        first_offset, first_term = ordered[0]
        first_list = self.postings.get(first_term)
        if first_list is None:
            return []
        candidates: Dict[int, List[int]] = {}
        for doc_id, positions in first_list.items():
            starts = [p - first_offset for p in positions if p >= first_offset]
            if starts:
                candidates[doc_id] = starts

        for offset, term in ordered[1:]:
            posting_list = self.postings.get(term)
            if posting_list is None:
                return []
            narrowed: Dict[int, List[int]] = {}
            for doc_id, starts in candidates.items():
                positions = posting_list.get(doc_id)
                if positions is None:
                    continue
                kept = [s for s in starts if _contains(positions, s + offset)]
                if kept:
                    narrowed[doc_id] = kept
            candidates = narrowed
            if not candidates:
                break

        return sorted(candidates)

    # -----------------------
    # Size estimates
    # -----------------------
    def approximate_term_list_size_in_bytes(self) -> int:
        return sizes.term_table_size(len(self.postings)) + sizes.frequency_table_size(len(self.term_frequencies))

    def approximate_posting_list_sizes_in_bytes(self) -> List[int]:
        return sizes.posting_list_sizes(self.postings)

    def approximate_posting_list_sizes_in_bytes_by_term(self) -> Dict[str, int]:
        return sizes.posting_list_sizes_by_term(self.postings)

    # -----------------------
    # Sampling
    # -----------------------
    def sample(self, n: int, rng: Optional[np.random.Generator] = None) -> Dict[str, int]:
        return weighted_sample(self.term_frequencies, n, rng=rng)

    # -----------------------
    # Snapshots
    # -----------------------
    def to_snapshot(self) -> Dict[str, Any]:
        return {
            "postings": {
                term: {doc_id: list(positions) for doc_id, positions in pl.items()}
                for term, pl in self.postings.items()
            },
            "term_frequencies": dict(self.term_frequencies),
            "ordering": self.ordering.value,
        }

    @classmethod
    def from_snapshot(cls, data: Dict[str, Any]) -> "PositionalInvertedIndex":
        try:
            snap = IndexSnapshot.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"invalid index snapshot ({e.error_count()} error(s)): {e}") from e
        index = cls(ordering=snap.ordering)
        index.postings = snap.postings
        index.term_frequencies = snap.term_frequencies
        logger.debug("Restored %r", index)
        return index
