from typing import Dict, List
from pydantic import BaseModel, Field, NonNegativeInt, PositiveInt, model_validator

from phraseindex.index.ordering import TokenOrdering

# Structural form of a PositionalInvertedIndex, as handed to persistence:
#   postings:          term -> doc_id -> ascending positions
#   term_frequencies:  term -> total occurrences across the corpus
#   ordering:          TokenOrdering value

class IndexSnapshot(BaseModel):
    postings: Dict[str, Dict[NonNegativeInt, List[NonNegativeInt]]] = Field(default_factory=dict)
    term_frequencies: Dict[str, PositiveInt] = Field(default_factory=dict)
    ordering: TokenOrdering = TokenOrdering.TOKEN_ORDER

    @model_validator(mode="after")
    def _check_consistency(self) -> "IndexSnapshot":
        if set(self.postings) != set(self.term_frequencies):
            missing = set(self.postings) ^ set(self.term_frequencies)
            sample = ", ".join(sorted(missing)[:5])
            raise ValueError(f"postings and term_frequencies disagree on terms: {sample}")
        for term, posting_list in self.postings.items():
            if not term:
                raise ValueError("empty term in postings")
            if not posting_list:
                raise ValueError(f"term {term!r} has an empty posting list")
            total = 0
            for doc_id, positions in posting_list.items():
                if not positions:
                    raise ValueError(f"term {term!r} doc {doc_id} has no positions")
                if any(a > b for a, b in zip(positions, positions[1:])):
                    raise ValueError(f"term {term!r} doc {doc_id} positions are not ascending")
                total += len(positions)
            if total != self.term_frequencies[term]:
                raise ValueError(
                    f"term {term!r} frequency {self.term_frequencies[term]} != {total} stored positions"
                )
        return self
