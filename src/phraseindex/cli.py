import argparse
import logging
from pathlib import Path
from typing import List

# Index & persistence
from phraseindex.index.ordering import TokenOrdering, parse_ordering
from phraseindex.index.positional import PositionalInvertedIndex
from phraseindex.index.persist import DEFAULT_INDEX_PATH, load_or_create, save_index
from phraseindex.text.paragraphs import read_file_into_paragraphs

# Benchmarking & analysis
from phraseindex.bench.benchmark import DEFAULT_RESULTS_DIR, benchmark_index
from phraseindex.bench.analysis import bytes_to_human_readable, print_top_n_final_posting_lists
from phraseindex.bench.queries import QuerySource

ORDERING_CHOICES = [o.value for o in TokenOrdering]
QUERY_SOURCE_CHOICES = [s.value for s in QuerySource]

# -----------------------
# Utilities
# -----------------------
def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

def _open_index(args: argparse.Namespace) -> PositionalInvertedIndex:
    """Load the index at --index, or start an empty one with --ordering if the file doesn't exist yet."""
    return load_or_create(Path(args.index), ordering=parse_ordering(args.ordering))

def _non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return n

def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return n

# -----------------------
# Subcommand handlers
# -----------------------
def cmd_index(args: argparse.Namespace) -> None:
    index = _open_index(args)
    index.index_document(args.doc_id, args.content)
    save_index(index, args.index)
    print(f"Indexed document {args.doc_id} ({len(index)} terms total) -> {args.index}")

def cmd_index_file(args: argparse.Namespace) -> None:
    path = Path(args.path)
    if not path.exists():
        raise FileNotFoundError(f"Document file not found: {path}")
    index = _open_index(args)
    paragraphs = read_file_into_paragraphs(str(path))
    for offset, paragraph in enumerate(paragraphs):
        index.index_document(args.start_id + offset, paragraph)
    save_index(index, args.index)
    if paragraphs:
        last = args.start_id + len(paragraphs) - 1
        print(f"Indexed {len(paragraphs)} paragraphs as documents {args.start_id}..{last} -> {args.index}")
    else:
        print(f"No paragraphs found in {path}")

def cmd_search(args: argparse.Namespace) -> None:
    index = _open_index(args)
    results = index.search(args.query)
    print(f"Search results: {results}")

def cmd_term_list_size(args: argparse.Namespace) -> None:
    index = _open_index(args)
    size = index.approximate_term_list_size_in_bytes()
    print(f"Approximate term list size in bytes: {size} ({bytes_to_human_readable(size)})")

def cmd_posting_list_sizes(args: argparse.Namespace) -> None:
    index = _open_index(args)
    if args.by_term:
        sizes = index.approximate_posting_list_sizes_in_bytes_by_term()
        key_w = max((len(t) for t in sizes), default=0)
        for term in sorted(sizes):
            print(f"{term.ljust(key_w)} : {sizes[term]}")
        return
    print(f"Approximate posting list sizes in bytes: {index.approximate_posting_list_sizes_in_bytes()}")

def cmd_sample(args: argparse.Namespace) -> None:
    index = _open_index(args)
    terms = index.sample(args.n)
    if not terms:
        print("No terms.")
        return
    for term, freq in sorted(terms.items(), key=lambda x: (-x[1], x[0])):
        print(f"{term}\t{freq}")

def cmd_benchmark(args: argparse.Namespace) -> None:
    summary = benchmark_index(
        filenames=args.files,
        query_frequency=args.query_frequency,
        num_queries=args.num_queries,
        max_query_tokens=args.max_query_tokens,
        target_directory=args.target_dir,
        ordering=args.ordering,
        query_source=args.query_source,
        sample_size=args.sample_size,
    )
    print(f"\n== Benchmark ({args.target_dir}) ==")
    key_w = max(len(k) for k in summary)
    for k, v in summary.items():
        if isinstance(v, float):
            print(f"{k.ljust(key_w)} : {v:.4f}")
        else:
            print(f"{k.ljust(key_w)} : {v}")

def cmd_top_posting_lists(args: argparse.Namespace) -> None:
    print_top_n_final_posting_lists(args.target_dir, args.n)

# -----------------------
# Main / argparse wiring
# -----------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phraseindex",
        description="Positional inverted index: index documents, run phrase searches, benchmark.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for progress, -vv for debug logging")
    sub = parser.add_subparsers(dest="cmd")

    # Shared args helper
    def add_index_args(p):
        p.add_argument("--index", type=str, default=str(DEFAULT_INDEX_PATH),
                       help=f"Path to the index snapshot (default: {DEFAULT_INDEX_PATH})")
        p.add_argument("--ordering", choices=ORDERING_CHOICES, default=TokenOrdering.TOKEN_ORDER.value,
                       help="Query term ordering for a newly created index (default: token_order)")

    # index
    p_idx = sub.add_parser("index", help="Index one document")
    add_index_args(p_idx)
    p_idx.add_argument("doc_id", type=_non_negative_int, help="The ID of the document to index")
    p_idx.add_argument("content", type=str, help="The content of the document to index")
    p_idx.set_defaults(func=cmd_index)

    # index-file
    p_file = sub.add_parser("index-file", help="Index every paragraph of a text file as its own document")
    add_index_args(p_file)
    p_file.add_argument("path", type=str, help="Text file; paragraphs are separated by blank lines")
    p_file.add_argument("--start-id", type=_non_negative_int, default=0,
                        help="Doc id of the first paragraph (default: 0)")
    p_file.set_defaults(func=cmd_index_file)

    # search
    p_search = sub.add_parser("search", help="Find documents containing a phrase")
    add_index_args(p_search)
    p_search.add_argument("query", type=str, help="The phrase to search for")
    p_search.set_defaults(func=cmd_search)

    # term-list-size
    p_tls = sub.add_parser("term-list-size", help="Print the approximate size of the term list in bytes")
    add_index_args(p_tls)
    p_tls.set_defaults(func=cmd_term_list_size)

    # posting-list-sizes
    p_pls = sub.add_parser("posting-list-sizes", help="Print the approximate size of each posting list in bytes")
    add_index_args(p_pls)
    p_pls.add_argument("--by-term", action="store_true", help="Print one line per term instead of a sorted list")
    p_pls.set_defaults(func=cmd_posting_list_sizes)

    # sample
    p_sample = sub.add_parser("sample", help="Draw terms at random, weighted by corpus frequency")
    add_index_args(p_sample)
    p_sample.add_argument("n", type=_non_negative_int, help="How many distinct terms to draw")
    p_sample.set_defaults(func=cmd_sample)

    # benchmark
    p_bench = sub.add_parser("benchmark", help="Build an index from text files while timing ingestion and queries")
    p_bench.add_argument("files", nargs="+", help="Text files; each paragraph becomes a document")
    p_bench.add_argument("--query-frequency", type=_positive_int, default=10,
                         help="Run queries every N paragraphs (default: 10)")
    p_bench.add_argument("--num-queries", type=_non_negative_int, default=10,
                         help="Queries per measurement point (default: 10)")
    p_bench.add_argument("--max-query-tokens", type=_positive_int, default=3,
                         help="Max terms per generated query (default: 3)")
    p_bench.add_argument("--target-dir", type=str, default=str(DEFAULT_RESULTS_DIR),
                         help=f"Where CSVs and the run log go (default: {DEFAULT_RESULTS_DIR})")
    p_bench.add_argument("--query-source", choices=QUERY_SOURCE_CHOICES, default=QuerySource.FIXED.value,
                         help="fixed dictionary, or terms sampled from the index (default: fixed)")
    p_bench.add_argument("--sample-size", type=_positive_int, default=100,
                         help="Distinct terms to sample per measurement when --query-source=sampled")
    p_bench.add_argument("--ordering", choices=ORDERING_CHOICES, default=TokenOrdering.TOKEN_ORDER.value,
                         help="Query term ordering (default: token_order)")
    p_bench.set_defaults(func=cmd_benchmark)

    # top-posting-lists
    p_top = sub.add_parser("top-posting-lists", help="Show the largest posting lists from a benchmark run")
    p_top.add_argument("--target-dir", type=str, default=str(DEFAULT_RESULTS_DIR),
                       help=f"Benchmark output directory (default: {DEFAULT_RESULTS_DIR})")
    p_top.add_argument("-n", type=_positive_int, default=10, help="How many to show (default: 10)")
    p_top.set_defaults(func=cmd_top_posting_lists)

    return parser

def main(argv: List[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    if not getattr(args, "func", None):
        parser.print_help()
    else:
        args.func(args)

if __name__ == "__main__":
    main()
