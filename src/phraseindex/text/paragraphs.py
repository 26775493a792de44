import regex as re
from typing import List

# one or more blank (or whitespace-only) lines
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")

def split_paragraphs(text: str) -> List[str]:
    """
    Split `text` on blank lines into trimmed, non-empty paragraphs.

    Each paragraph is treated as one document by the benchmark and by
    `phraseindex index-file`.
    """
    parts = (p.strip() for p in _PARAGRAPH_BREAK.split(text))
    return [p for p in parts if p]

def read_file_into_paragraphs(path: str) -> List[str]:
    with open(path, "r", encoding="utf-8") as f:
        txt = f.read()
    return split_paragraphs(txt)
