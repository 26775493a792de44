import gzip
import json
import logging
import zlib
from pathlib import Path
from typing import Union

from phraseindex.index.ordering import TokenOrdering, parse_ordering
from phraseindex.index.positional import PositionalInvertedIndex

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_INDEX_PATH = Path("data/index/phrase_index.json.gz")

def save_index(index: PositionalInvertedIndex, path: PathLike = DEFAULT_INDEX_PATH) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    # write to a sibling file first so a crash mid-write leaves the old snapshot intact
    tmp = path.with_name(path.name + ".tmp")
    with gzip.open(tmp, "wt", encoding="utf-8") as f:
        json.dump(index.to_snapshot(), f)
    tmp.replace(path)
    logger.info("Saved index with %d terms to %s", len(index), path)
    return path

def load_index(path: PathLike = DEFAULT_INDEX_PATH) -> PositionalInvertedIndex:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Index file not found: {path}")
    try:
        with gzip.open(path, "rt", encoding="utf-8") as f:
            obj = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"{path}: invalid JSON ({e.msg})") from e
    except (OSError, EOFError, UnicodeDecodeError, zlib.error) as e:
        raise ValueError(f"{path}: not a gzip index snapshot ({e})") from e
    if not isinstance(obj, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(obj).__name__}")
    try:
        index = PositionalInvertedIndex.from_snapshot(obj)
    except ValueError as e:
        raise ValueError(f"{path}: {e}") from e
    logger.info("Loaded index with %d terms from %s", len(index), path)
    return index

def load_or_create(
    path: PathLike = DEFAULT_INDEX_PATH,
    ordering: TokenOrdering = TokenOrdering.TOKEN_ORDER,
) -> PositionalInvertedIndex:
    """Load the snapshot at `path`, or start an empty index with `ordering` if there is none yet."""
    if Path(path).exists():
        return load_index(path)
    logger.info("No index at %s, starting empty (%s)", path, parse_ordering(ordering).value)
    return PositionalInvertedIndex(ordering=ordering)
