import regex as re
from typing import List

# Anything that is not a letter or a number (same notion of "alphanumeric"
# as str.isalnum, but including combining marks that belong to letters)
_NON_ALNUM = re.compile(r"[^\p{Alphabetic}\p{N}]+")

def normalize_token(chunk: str) -> str:
    """Strip everything but letters/digits from one whitespace chunk, then lowercase it."""
    return _NON_ALNUM.sub("", chunk).lower()

def tokenize(text: str) -> List[str]:
    # e-mail -> email, "Hello," -> hello; chunks that end up empty are dropped
    # so positions only count real terms
    terms = (normalize_token(chunk) for chunk in text.split())
    return [t for t in terms if t]
