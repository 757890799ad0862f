"""
Tests for search scoring, fusion, enrichment and the retrieval engine.
"""

from __future__ import annotations

import math

import pytest

from msharag.domains.corpus import Chunk, CorpusStore, Source, Vector

from .engine import RetrievalEngine
from .enrichment import enrich
from .fusion import fuse, reciprocal_rank_fusion
from .models import EnrichedResult, SearchMode, SearchRequest, SearchResponse
from .scoring import cosine_similarity, score_keyword, score_semantic, split_terms


@pytest.fixture
def part56_store() -> CorpusStore:
    """Single chunk with a resolvable source."""
    return CorpusStore(
        sources=[
            Source(source_id="s1", source_name="Part 56", uri="http://x", type="regulation")
        ],
        chunks=[Chunk(chunk_id="c1", source_id="s1", text="Miners must wear hard hats")],
    )


@pytest.fixture
def chunks() -> list[Chunk]:
    """Chunks for keyword ranking."""
    return [
        Chunk(chunk_id="c1", source_id="s1", text="Ventilation plan approval"),
        Chunk(chunk_id="c2", source_id="s1", text="Hard hats and safety glasses"),
        Chunk(chunk_id="c3", source_id="s2", text="Hard hat inspection records"),
        Chunk(chunk_id="c4", source_id="s2", text="Safety training for new miners"),
    ]


@pytest.fixture
def vector_store() -> CorpusStore:
    """Two orthogonal embeddings plus one stale vector."""
    return CorpusStore(
        chunks=[
            Chunk(chunk_id="a", source_id="s1", text="alpha roof bolting"),
            Chunk(chunk_id="b", source_id="s1", text="beta hard hats"),
        ],
        vectors=[
            Vector(chunk_id="a", embedding=[1.0, 0.0]),
            Vector(chunk_id="b", embedding=[0.0, 1.0]),
            Vector(chunk_id="deleted", embedding=[0.9, 0.1]),
        ],
    )


# --- Keyword Scoring Tests ---


def test_split_terms_edge_whitespace() -> None:
    """Test only leading or trailing whitespace produces empty terms."""
    assert split_terms("Hard  Hats") == ["hard", "hats"]
    assert split_terms(" hats") == ["", "hats"]
    assert split_terms("hats ") == ["hats", ""]
    assert split_terms("") == [""]


def test_keyword_score_is_term_fraction(chunks: list[Chunk]) -> None:
    """Test score equals matched terms over total terms."""
    results = score_keyword("hard hats glasses", chunks, top_k=10)

    by_id = {r.chunk.chunk_id: r.score for r in results}
    assert by_id["c2"] == pytest.approx(1.0)
    # "hard hat inspection" contains "hard" but not "hats" or "glasses"
    assert by_id["c3"] == pytest.approx(1 / 3)


def test_keyword_results_sorted_and_nonzero(chunks: list[Chunk]) -> None:
    """Test results are non-increasing and never zero."""
    results = score_keyword("safety hard", chunks, top_k=10)

    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)
    assert all(s > 0 for s in scores)
    assert "c1" not in [r.chunk.chunk_id for r in results]


def test_keyword_ties_keep_corpus_order(chunks: list[Chunk]) -> None:
    """Test equal scores keep load order."""
    results = score_keyword("hard", chunks, top_k=10)
    assert [r.chunk.chunk_id for r in results] == ["c2", "c3"]


def test_keyword_substring_match_is_case_insensitive() -> None:
    """Test terms match anywhere in the lower-cased text."""
    chunk = Chunk(chunk_id="c", text="RESPIRATORS required")
    results = score_keyword("Respirator", [chunk], top_k=1)
    assert results[0].score == 1.0


def test_keyword_duplicate_terms_count_each() -> None:
    """Test duplicated query terms each count toward the fraction."""
    chunk = Chunk(chunk_id="c", text="dust control")
    results = score_keyword("dust dust noise", [chunk], top_k=1)
    assert results[0].score == pytest.approx(2 / 3)


def test_keyword_empty_term_counts_in_denominator() -> None:
    """Test a leading space adds an always-matching empty term."""
    chunk = Chunk(chunk_id="c", text="dust control")
    results = score_keyword(" dust noise", [chunk], top_k=1)
    # terms: "", "dust", "noise" -> "" and dust match
    assert results[0].score == pytest.approx(2 / 3)


def test_keyword_inner_whitespace_runs_collapse() -> None:
    """Test repeated inner spaces do not add terms."""
    chunk = Chunk(chunk_id="c", text="dust control")
    results = score_keyword("dust  noise", [chunk], top_k=1)
    assert results[0].score == pytest.approx(0.5)


def test_keyword_empty_query_matches_everything(chunks: list[Chunk]) -> None:
    """Test an empty query scores 1.0 for every chunk."""
    results = score_keyword("", chunks, top_k=10)
    assert len(results) == len(chunks)
    assert all(r.score == 1.0 for r in results)


def test_keyword_may_return_fewer_than_top_k(chunks: list[Chunk]) -> None:
    """Test zero scores inside the top_k window are dropped, not backfilled."""
    results = score_keyword("training", chunks, top_k=3)
    assert [r.chunk.chunk_id for r in results] == ["c4"]

    assert score_keyword("absent", chunks, top_k=2) == []


# --- Semantic Scoring Tests ---


def test_cosine_self_similarity_is_one() -> None:
    """Test cosine of a vector with itself is 1."""
    assert cosine_similarity([0.3, 0.4, 0.5], [0.3, 0.4, 0.5]) == pytest.approx(1.0)


def test_cosine_orthogonal_and_opposite() -> None:
    """Test orthogonal is 0 and opposite is -1."""
    assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)
    assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)


def test_cosine_zero_vector_is_nan() -> None:
    """Test zero-norm embeddings yield NaN instead of raising."""
    assert math.isnan(cosine_similarity([0.0, 0.0], [1.0, 0.0]))


def test_cosine_dimension_mismatch_is_nan() -> None:
    """Test mismatched dimensions yield NaN."""
    assert math.isnan(cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0]))


def test_semantic_returns_min_top_k_sorted(vector_store: CorpusStore) -> None:
    """Test semantic scoring returns min(top_k, n) sorted hits."""
    vectors = vector_store.all_vectors()

    hits = score_semantic([1.0, 0.0], vectors, top_k=2)
    assert len(hits) == 2
    assert [h.chunk_id for h in hits] == ["a", "deleted"]

    hits = score_semantic([1.0, 0.0], vectors, top_k=10)
    assert len(hits) == 3
    scores = [h.score for h in hits]
    assert scores == sorted(scores, reverse=True)


def test_semantic_keeps_negative_scores() -> None:
    """Test semantic scoring applies no zero filtering."""
    vectors = [Vector(chunk_id="neg", embedding=[-1.0, 0.0])]
    hits = score_semantic([1.0, 0.0], vectors, top_k=5)
    assert hits[0].score == pytest.approx(-1.0)


def test_semantic_nan_sorts_last() -> None:
    """Test degenerate NaN scores rank after real scores."""
    vectors = [
        Vector(chunk_id="zero", embedding=[0.0, 0.0]),
        Vector(chunk_id="real", embedding=[0.5, 0.5]),
    ]
    hits = score_semantic([1.0, 0.0], vectors, top_k=2)
    assert hits[0].chunk_id == "real"
    assert math.isnan(hits[1].score)


# --- Fusion Tests ---


def test_rrf_contributions() -> None:
    """Test each list contributes 1 / (position + 1)."""
    scores = reciprocal_rank_fusion(["x", "y"], ["y", "z"])
    assert scores["x"] == pytest.approx(1.0)
    assert scores["y"] == pytest.approx(1 / 2 + 1.0)
    assert scores["z"] == pytest.approx(1 / 2)


def test_rrf_with_constant() -> None:
    """Test the RRF constant shifts ranks."""
    scores = reciprocal_rank_fusion(["x"], rrf_k=60)
    assert scores["x"] == pytest.approx(1 / 61)


def test_rrf_sum_is_order_independent() -> None:
    """Test accumulated scores do not depend on list order."""
    a = reciprocal_rank_fusion(["x", "y"], ["y", "z"])
    b = reciprocal_rank_fusion(["y", "z"], ["x", "y"])
    assert a == pytest.approx(b)


def test_fuse_ties_keep_first_seen_order() -> None:
    """Test ties resolve keyword-first, then semantic."""
    lookup = {cid: Chunk(chunk_id=cid, text=cid) for cid in ["k", "s"]}

    fused = fuse(["k"], ["s"], resolve=lookup.get, top_k=5)
    assert [r.chunk.chunk_id for r in fused] == ["k", "s"]
    assert fused[0].score == fused[1].score == pytest.approx(1.0)


def test_fuse_drops_unresolved_and_truncates() -> None:
    """Test stale IDs are dropped and output is cut to top_k."""
    lookup = {cid: Chunk(chunk_id=cid, text=cid) for cid in ["a", "b", "c"]}

    fused = fuse(["a", "b"], ["gone", "c", "a"], resolve=lookup.get, top_k=2)
    ids = [r.chunk.chunk_id for r in fused]
    assert "gone" not in ids
    assert ids[0] == "a"
    assert len(ids) == 2


# --- Enrichment Tests ---


def test_enrich_with_source(part56_store: CorpusStore) -> None:
    """Test enrichment copies source fields."""
    chunk = part56_store.get_chunk("c1")
    result = enrich(chunk, 0.5, part56_store)

    assert result.source_name == "Part 56"
    assert result.source_url == "http://x"
    assert result.source_type == "regulation"
    assert result.score == 0.5


def test_enrich_missing_source_yields_nulls(part56_store: CorpusStore) -> None:
    """Test unresolved source IDs give null source fields only."""
    chunk = Chunk(chunk_id="orphan", source_id="nope", text="text", metadata={"p": 1})
    result = enrich(chunk, 1.0, part56_store)

    assert result.source_url is None
    assert result.source_name is None
    assert result.source_type is None
    assert result.chunk_id == "orphan"
    assert result.text == "text"
    assert result.source_id == "nope"
    assert result.metadata == {"p": 1}


def test_enriched_result_nan_score_serializes_to_null() -> None:
    """Test NaN scores dump as JSON null."""
    result = EnrichedResult(chunk_id="c", text="t", score=math.nan, source_id="s")
    assert result.model_dump(mode="json")["score"] is None
    assert '"score":null' in result.model_dump_json()


# --- Model Tests ---


def test_search_request_defaults() -> None:
    """Test SearchRequest defaults to keyword mode and no explicit top_k."""
    request = SearchRequest(query="hard hats")
    assert request.mode == "keyword"
    assert request.top_k is None
    assert request.query_vector is None


def test_search_mode_values() -> None:
    """Test SearchMode enum values."""
    assert SearchMode.KEYWORD.value == "keyword"
    assert SearchMode.SEMANTIC.value == "semantic"
    assert SearchMode.HYBRID.value == "hybrid"


# --- RetrievalEngine Tests ---


def test_engine_keyword_end_to_end(part56_store: CorpusStore) -> None:
    """Test the hard hats scenario returns one fully-matched result."""
    engine = RetrievalEngine(part56_store)
    response = engine.search("hard hats", mode="keyword", top_k=10)

    assert isinstance(response, SearchResponse)
    assert response.total == 1
    assert response.mode == "keyword"
    assert response.results[0].score == 1.0
    assert response.results[0].source_name == "Part 56"


def test_engine_empty_corpus() -> None:
    """Test an empty corpus returns an empty keyword response."""
    engine = RetrievalEngine(CorpusStore())
    response = engine.search("anything", mode="keyword")

    assert response.model_dump() == {"results": [], "total": 0, "mode": "keyword"}


def test_engine_semantic_top1(vector_store: CorpusStore) -> None:
    """Test semantic mode returns the matching embedding first."""
    engine = RetrievalEngine(vector_store)
    response = engine.search("", mode="semantic", top_k=1, query_vector=[1.0, 0.0])

    assert response.total == 1
    assert response.results[0].chunk_id == "a"
    assert response.results[0].score == pytest.approx(1.0)


def test_engine_semantic_drops_stale_vectors(vector_store: CorpusStore) -> None:
    """Test hits for chunks missing from the corpus are dropped."""
    engine = RetrievalEngine(vector_store)
    response = engine.search("", mode="semantic", top_k=2, query_vector=[1.0, 0.0])

    # Second hit is the stale "deleted" vector: dropped, not replaced
    assert [r.chunk_id for r in response.results] == ["a"]


@pytest.mark.parametrize("mode", ["semantic", "hybrid"])
def test_engine_vector_modes_need_query_vector(vector_store: CorpusStore, mode: str) -> None:
    """Test semantic and hybrid without a vector return empty."""
    engine = RetrievalEngine(vector_store)
    response = engine.search("hard hats", mode=mode)

    assert response.results == []
    assert response.total == 0
    assert response.mode == mode


def test_engine_keyword_ignores_query_vector(part56_store: CorpusStore) -> None:
    """Test keyword mode runs keyword scoring even with a vector."""
    engine = RetrievalEngine(part56_store)
    response = engine.search("hard hats", mode="keyword", query_vector=[1.0, 0.0])
    assert response.results[0].score == 1.0


def test_engine_unknown_mode_is_empty(part56_store: CorpusStore) -> None:
    """Test unknown modes return empty and echo the mode."""
    engine = RetrievalEngine(part56_store)
    response = engine.search("hard hats", mode="fuzzy")

    assert response.total == 0
    assert response.mode == "fuzzy"


def test_engine_hybrid_fuses_both_lists(vector_store: CorpusStore) -> None:
    """Test hybrid mode rewards chunks found by both rankers."""
    engine = RetrievalEngine(vector_store)
    response = engine.search("hard hats", mode="hybrid", top_k=2, query_vector=[0.0, 1.0])

    # "b" is keyword rank 1 and semantic rank 1
    assert response.results[0].chunk_id == "b"
    assert response.results[0].score == pytest.approx(2.0)
    assert "deleted" not in [r.chunk_id for r in response.results]
    scores = [r.score for r in response.results]
    assert scores == sorted(scores, reverse=True)


def test_engine_hybrid_is_deterministic(vector_store: CorpusStore) -> None:
    """Test repeated hybrid searches return the same ranking."""
    engine = RetrievalEngine(vector_store)
    first = engine.search("alpha", mode="hybrid", top_k=3, query_vector=[0.7, 0.3])
    second = engine.search("alpha", mode="hybrid", top_k=3, query_vector=[0.7, 0.3])
    assert first == second


@pytest.mark.parametrize("top_k", [0, -5])
def test_engine_clamps_top_k(part56_store: CorpusStore, top_k: int) -> None:
    """Test non-positive top_k is clamped to 1."""
    engine = RetrievalEngine(part56_store)
    response = engine.search("hard hats", mode="keyword", top_k=top_k)
    assert response.total == 1
