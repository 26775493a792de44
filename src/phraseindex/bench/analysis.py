from pathlib import Path
from typing import List, Tuple

import pandas as pd

from phraseindex.bench.benchmark import FINAL_SIZES_CSV

_UNITS = ["B", "KB", "MB", "GB", "TB"]

def bytes_to_human_readable(num_bytes: int) -> str:
    size = float(num_bytes)
    i = 0
    while size >= 1024.0 and i < len(_UNITS) - 1:
        size /= 1024.0
        i += 1
    return f"{size:.2f} {_UNITS[i]}"

def top_n_final_posting_lists(target_dir: str, n: int) -> List[Tuple[str, int]]:
    """Largest `n` (term, size) pairs from the benchmark's final_posting_list_sizes.csv, biggest first."""
    path = Path(target_dir) / FINAL_SIZES_CSV
    if not path.exists():
        raise FileNotFoundError(f"Posting list sizes not found: {path}")
    # keep_default_na: a term like "nan" or "null" is still a term
    df = pd.read_csv(path, dtype={"Term": str}, keep_default_na=False)
    top = df.sort_values("Size", ascending=False, kind="stable").head(n)
    return [(str(term), int(size)) for term, size in zip(top["Term"], top["Size"])]

def print_top_n_final_posting_lists(target_dir: str, n: int) -> None:
    top_n = top_n_final_posting_lists(target_dir, n)
    print(f"Top {n} posting lists:")
    for term, size in top_n:
        print(f"{term}: {bytes_to_human_readable(size)}")
