"""
Test suite for tokenization, lexical scoring and lexical-only selection.

System role: Verification of sparse retrieval
"""

from chat_engine.core.retrieval import (
    ContextBudget,
    score_chunk,
    select_context_lexical,
    tokenize,
)
from chat_engine.models.chunk import Chunk


class TestTokenize:
    """Test suite for tokenize."""

    def test_tokenize_should_lowercase_and_strip_punctuation(self) -> None:
        assert tokenize("What's up, Mammals?!") == ["what", "mammals"]

    def test_tokenize_should_drop_short_terms(self) -> None:
        assert tokenize("an ox is big") == ["big"]

    def test_tokenize_should_handle_none_and_empty(self) -> None:
        assert tokenize(None) == []
        assert tokenize("   ") == []

    def test_tokenize_should_keep_digits(self) -> None:
        assert tokenize("Section 2024 budget") == ["section", "2024", "budget"]


class TestScoreChunk:
    """Test suite for score_chunk."""

    def test_score_should_count_whole_word_occurrences(self) -> None:
        text = "Mammals are warm. mammals nurse. mammalsx is not a word."

        assert score_chunk(text, ["mammals"]) == 2

    def test_score_should_sum_over_terms(self) -> None:
        assert score_chunk("cats chase mice; cats nap", ["cats", "mice"]) == 3

    def test_score_should_be_zero_without_terms(self) -> None:
        assert score_chunk("anything", []) == 0


class TestSelectContextLexical:
    """Test suite for select_context_lexical."""

    def test_should_return_matching_chunks_and_exclude_non_matching(
        self, animal_chunks: list[Chunk]
    ) -> None:
        """Only the two mammal chunks survive, ties kept in document order."""
        selected = select_context_lexical(animal_chunks, "mammals", ContextBudget())

        assert [item.id for item in selected] == ["c1", "c2"]

    def test_should_rank_by_score(self) -> None:
        chunks = [
            Chunk(id="a", text="planets"),
            Chunk(id="b", text="planets planets planets"),
        ]

        selected = select_context_lexical(chunks, "planets", ContextBudget())

        assert [item.id for item in selected] == ["b", "a"]

    def test_should_keep_document_order_when_query_has_no_terms(
        self, animal_chunks: list[Chunk]
    ) -> None:
        selected = select_context_lexical(animal_chunks, "is it?", ContextBudget())

        assert [item.id for item in selected] == ["c1", "c2", "c3"]

    def test_should_keep_all_chunks_when_nothing_matches(
        self, animal_chunks: list[Chunk]
    ) -> None:
        selected = select_context_lexical(animal_chunks, "submarines", ContextBudget())

        assert [item.id for item in selected] == ["c1", "c2", "c3"]
