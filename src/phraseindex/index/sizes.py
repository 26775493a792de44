"""
Rough memory-footprint estimates for a positional index.

These are capacity-planning figures, not measurements: every term is assumed
to be AVG_TERM_BYTES long and every stored integer is assumed to take one
machine word. The per-term posting list figure projects what it would cost to
move posting lists out to remote object storage, where each term's list is
fetched as a unit.
"""
import struct
from typing import Dict, List

Postings = Dict[str, Dict[int, List[int]]]

# machine word (pointer / size_t) on this interpreter, 8 on 64-bit builds
WORD_SIZE = struct.calcsize("P")
# average English word is 4 characters
AVG_TERM_BYTES = 4
# fixed cost of an empty hash table header
MAP_BASE_BYTES = 6 * WORD_SIZE
# one hash table slot holding a string key: (hash, key ptr, value ptr)
STRING_ENTRY_BYTES = 3 * WORD_SIZE


def term_table_size(num_terms: int) -> int:
    return MAP_BASE_BYTES + num_terms * (STRING_ENTRY_BYTES + AVG_TERM_BYTES)


def frequency_table_size(num_terms: int) -> int:
    return MAP_BASE_BYTES + num_terms * (STRING_ENTRY_BYTES + WORD_SIZE)


def posting_list_size(posting_list: Dict[int, List[int]]) -> int:
    # +1 per document for the doc id itself
    return sum((len(positions) + 1) * WORD_SIZE for positions in posting_list.values())


def posting_list_sizes(postings: Postings) -> List[int]:
    return sorted(posting_list_size(pl) for pl in postings.values())


def posting_list_sizes_by_term(postings: Postings) -> Dict[str, int]:
    return {term: posting_list_size(pl) for term, pl in postings.items()}
