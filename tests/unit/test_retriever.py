from rag.retriever import query_terms, score_chunk, top_k_chunks


CHUNKS = [
    "Databases store rows. SQL queries read rows.",
    "React renders components; components hold state.",
    "Nothing relevant here.",
    "SQL joins combine tables and SQL indexes speed queries.",
]


def test_query_terms_are_lowercase_alphanumeric():
    assert query_terms("SQL, Joins & C++!") == ["sql", "joins", "c"]
    assert query_terms("") == []


def test_score_counts_occurrences_per_term():
    assert score_chunk("sql queries", CHUNKS[3]) == 3
    assert score_chunk("sql", CHUNKS[2]) == 0
    assert score_chunk("", CHUNKS[0]) == 0
    assert score_chunk("sql", "") == 0


def test_substring_matches_count():
    assert score_chunk("row", "rows and rows") == 2


def test_top_k_sorted_and_bounded():
    ranked = top_k_chunks("sql queries", CHUNKS, k=2)

    assert len(ranked) == 2
    assert [item.id for item in ranked] == [3, 0]
    assert ranked[0].score >= ranked[1].score


def test_top_k_never_exceeds_chunk_count():
    ranked = top_k_chunks("react", CHUNKS, k=10)

    assert len(ranked) == len(CHUNKS)
    scores = [item.score for item in ranked]
    assert scores == sorted(scores, reverse=True)


def test_ties_keep_insertion_order():
    ranked = top_k_chunks("zebra", ["a", "b", "c"], k=3)

    assert [item.id for item in ranked] == [0, 1, 2]
    assert all(item.score == 0 for item in ranked)


def test_non_positive_k_returns_nothing():
    assert top_k_chunks("sql", CHUNKS, k=0) == []
