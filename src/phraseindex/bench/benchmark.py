"""
Benchmark harness: grow an index paragraph by paragraph and measure how
ingestion time, query time and posting-list sizes evolve with corpus size.

Writes to `target_directory`:
  - indexing_data.csv            (Document Count, Indexing Duration)
  - querying_data.csv            (Document Count, Tokens in Query, Query Duration)
  - size_data.csv                (Paragraph, Mean Posting List Size, Std Dev Posting List Size)
  - final_posting_list_sizes.csv (Term, Size) for the fully built index
  - benchmark-<timestamp>.json   (run config + summary, see runlog)
Durations are in seconds.
"""
from __future__ import annotations
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from phraseindex.bench.queries import (
    QuerySource,
    generate_queries_from_distribution,
    generate_queries_from_fixed_dictionary,
)
from phraseindex.bench.runlog import log_run
from phraseindex.index.ordering import TokenOrdering, parse_ordering
from phraseindex.index.positional import PositionalInvertedIndex
from phraseindex.text.paragraphs import read_file_into_paragraphs

logger = logging.getLogger(__name__)

INDEXING_CSV = "indexing_data.csv"
QUERYING_CSV = "querying_data.csv"
SIZE_CSV = "size_data.csv"
FINAL_SIZES_CSV = "final_posting_list_sizes.csv"

DEFAULT_RESULTS_DIR = Path("data/benchmark")

def compute_mean_and_std_dev(sizes: Sequence[int]) -> Tuple[float, float]:
    """Population mean and standard deviation; (0.0, 0.0) for no data."""
    if len(sizes) == 0:
        return 0.0, 0.0
    arr = np.asarray(sizes, dtype=np.float64)
    return float(arr.mean()), float(arr.std())

def _make_queries(
    index: PositionalInvertedIndex,
    source: QuerySource,
    num_queries: int,
    max_tokens: int,
    sample_size: int,
    rng: np.random.Generator,
) -> List[str]:
    if source is QuerySource.FIXED:
        return generate_queries_from_fixed_dictionary(num_queries, max_tokens, rng=rng)
    terms = index.sample(sample_size, rng=rng)
    return generate_queries_from_distribution(num_queries, max_tokens, terms, rng=rng)

def benchmark_index(
    filenames: Sequence[str],
    query_frequency: int,
    num_queries: int,
    max_query_tokens: int,
    target_directory: str | Path = DEFAULT_RESULTS_DIR,
    ordering: TokenOrdering | str = TokenOrdering.TOKEN_ORDER,
    query_source: QuerySource | str = QuerySource.FIXED,
    sample_size: int = 100,
    rng: Optional[np.random.Generator] = None,
) -> Dict[str, Any]:
    """
    Index every paragraph of every file (consecutive doc ids from 0); every
    `query_frequency` paragraphs, time `num_queries` synthetic queries and
    record posting-list size statistics. Returns a summary dict.
    """
    if query_frequency < 1:
        raise ValueError(f"query_frequency must be >= 1, got {query_frequency}")
    ordering = parse_ordering(ordering)
    query_source = QuerySource(query_source)
    rng = rng if rng is not None else np.random.default_rng()

    target = Path(target_directory)
    target.mkdir(parents=True, exist_ok=True)

    index = PositionalInvertedIndex(ordering=ordering)
    indexing_rows: List[Dict[str, Any]] = []
    querying_rows: List[Dict[str, Any]] = []
    size_rows: List[Dict[str, Any]] = []

    paragraph_counter = 0
    for filename in filenames:
        paragraphs = read_file_into_paragraphs(filename)
        logger.info("Benchmarking %d paragraphs from %s", len(paragraphs), filename)

        for paragraph in paragraphs:
            start = time.perf_counter()
            index.index_document(paragraph_counter, paragraph)
            indexing_rows.append({
                "Document Count": paragraph_counter,
                "Indexing Duration": time.perf_counter() - start,
            })

            if paragraph_counter % query_frequency == 0:
                queries = _make_queries(index, query_source, num_queries, max_query_tokens, sample_size, rng)
                for query in queries:
                    q_start = time.perf_counter()
                    index.search(query)
                    querying_rows.append({
                        "Document Count": paragraph_counter,
                        "Tokens in Query": len(query.split()),
                        "Query Duration": time.perf_counter() - q_start,
                    })

                mean, std_dev = compute_mean_and_std_dev(index.approximate_posting_list_sizes_in_bytes())
                size_rows.append({
                    "Paragraph": paragraph_counter,
                    "Mean Posting List Size": mean,
                    "Std Dev Posting List Size": std_dev,
                })
                logger.debug("paragraph %d: %d terms, mean posting list %.1f B", paragraph_counter, len(index), mean)

            paragraph_counter += 1

    indexing_df = pd.DataFrame(indexing_rows, columns=["Document Count", "Indexing Duration"])
    querying_df = pd.DataFrame(querying_rows, columns=["Document Count", "Tokens in Query", "Query Duration"])
    size_df = pd.DataFrame(size_rows, columns=["Paragraph", "Mean Posting List Size", "Std Dev Posting List Size"])
    final_df = pd.DataFrame(
        sorted(index.approximate_posting_list_sizes_in_bytes_by_term().items()),
        columns=["Term", "Size"],
    )

    indexing_df.to_csv(target / INDEXING_CSV, index=False)
    querying_df.to_csv(target / QUERYING_CSV, index=False)
    size_df.to_csv(target / SIZE_CSV, index=False)
    final_df.to_csv(target / FINAL_SIZES_CSV, index=False)

    summary: Dict[str, Any] = {
        "documents": paragraph_counter,
        "terms": len(index),
        "queries": len(querying_df),
        "indexing_total_s": float(indexing_df["Indexing Duration"].sum()),
        "query_p50_ms": float(querying_df["Query Duration"].quantile(0.5) * 1000) if len(querying_df) else None,
        "query_p95_ms": float(querying_df["Query Duration"].quantile(0.95) * 1000) if len(querying_df) else None,
        "term_list_bytes": index.approximate_term_list_size_in_bytes(),
        "posting_list_bytes": int(final_df["Size"].sum()),
    }
    config = {
        "filenames": list(filenames),
        "query_frequency": query_frequency,
        "num_queries": num_queries,
        "max_query_tokens": max_query_tokens,
        "ordering": ordering,
        "query_source": query_source,
        "sample_size": sample_size,
    }
    summary["run_log"] = log_run(config, summary, dir_path=str(target), prefix="benchmark")
    logger.info("Benchmark finished: %d documents, %d terms, %d queries", summary["documents"], summary["terms"], summary["queries"])
    return summary
