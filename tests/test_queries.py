from collections import Counter

import numpy as np
import pytest
from phraseindex.bench.queries import (
    FIXED_DICTIONARY,
    generate_queries_from_distribution,
    generate_queries_from_fixed_dictionary,
)

def test_fixed_dictionary_generates_requested_number():
    assert len(generate_queries_from_fixed_dictionary(10, 5)) == 10

def test_fixed_dictionary_query_length_within_range():
    for q in generate_queries_from_fixed_dictionary(50, 3):
        n = len(q.split())
        assert 0 < n <= 3

def test_fixed_dictionary_words_are_distinct_and_known():
    for q in generate_queries_from_fixed_dictionary(50, 10, rng=np.random.default_rng(3)):
        words = q.split()
        assert len(words) == len(set(words))
        assert set(words) <= set(FIXED_DICTIONARY)
        assert len(words) <= len(FIXED_DICTIONARY)

def test_bad_arguments():
    with pytest.raises(ValueError):
        generate_queries_from_fixed_dictionary(5, 0)
    with pytest.raises(ValueError):
        generate_queries_from_distribution(-1, 2, {"a": 1})

def test_distribution_basic():
    terms = {"term1": 1, "term2": 1}
    queries = generate_queries_from_distribution(5, 3, terms)
    assert len(queries) == 5
    for q in queries:
        assert 0 < len(q.split()) <= 3

def test_distribution_empty_terms():
    assert generate_queries_from_distribution(5, 3, {}) == []

def test_distribution_single_term():
    allowed = {"single_term", "single_term single_term", "single_term single_term single_term"}
    for q in generate_queries_from_distribution(20, 3, {"single_term": 1}):
        assert q in allowed

def test_distribution_uniform_weights():
    rng = np.random.default_rng(11)
    counts = Counter()
    for q in generate_queries_from_distribution(5000, 2, {"term1": 1, "term2": 1}, rng=rng):
        counts.update(q.split())
    hi, lo = max(counts.values()), min(counts.values())
    assert hi - lo < hi / 10

def test_distribution_varying_weights():
    rng = np.random.default_rng(5)
    counts = Counter()
    for q in generate_queries_from_distribution(2000, 2, {"common": 10, "rare": 1}, rng=rng):
        counts.update(q.split())
    assert counts["common"] > counts["rare"]
