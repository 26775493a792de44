from enum import Enum
from typing import Callable, Dict, List, Tuple

# (offset of the term inside the original phrase, term)
OrderedTerm = Tuple[int, str]
OrderingFn = Callable[[List[str], Dict[str, int]], List[OrderedTerm]]


class TokenOrdering(Enum):
    """How query terms are lined up before positional intersection."""
    TOKEN_ORDER = "token_order"
    ASCENDING_FREQUENCY_ORDER = "ascending_frequency_order"


def token_order(terms: List[str], frequencies: Dict[str, int]) -> List[OrderedTerm]:
    return list(enumerate(terms))


def ascending_frequency_order(terms: List[str], frequencies: Dict[str, int]) -> List[OrderedTerm]:
    # rarest first so the candidate set shrinks as early as possible.
    # sorted() is stable: equally frequent terms keep their phrase order
    return sorted(enumerate(terms), key=lambda pair: frequencies.get(pair[1], 0))


_ORDERING_FUNCTIONS: Dict[TokenOrdering, OrderingFn] = {
    TokenOrdering.TOKEN_ORDER: token_order,
    TokenOrdering.ASCENDING_FREQUENCY_ORDER: ascending_frequency_order,
}


def ordering_function(ordering: TokenOrdering) -> OrderingFn:
    return _ORDERING_FUNCTIONS[ordering]


def parse_ordering(value) -> TokenOrdering:
    """Accept a TokenOrdering, its value ("token_order") or its name ("TOKEN_ORDER")."""
    if isinstance(value, TokenOrdering):
        return value
    try:
        return TokenOrdering(value)
    except ValueError:
        pass
    try:
        return TokenOrdering[str(value).upper()]
    except KeyError:
        choices = ", ".join(o.value for o in TokenOrdering)
        raise ValueError(f"Unknown token ordering: {value!r} (expected one of: {choices})") from None
