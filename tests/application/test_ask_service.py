"""
Test suite for AskService.

System role: Verification of stateless question answering
"""

import pytest

from chat_engine.application.services import AskService
from chat_engine.configs import RetrievalSettings
from chat_engine.core.exceptions import MalformedInputError
from chat_engine.models.chat import AskRequest
from chat_engine.models.chunk import Chunk
from fakes import FakeCompletionClient


class TestAskService:
    """Test suite for AskService.answer."""

    @pytest.mark.asyncio
    async def test_should_answer_with_citations(
        self, animal_chunks: list[Chunk], completion_client: FakeCompletionClient
    ) -> None:
        service = AskService(completion_client, RetrievalSettings())

        response = await service.answer(AskRequest(question="mammals?", chunks=animal_chunks))

        assert response.answer == "Hello world"
        assert [citation.id for citation in response.citations] == ["C1", "C2"]
        assert response.citations[1].page_start == 2

    @pytest.mark.asyncio
    async def test_blank_question_should_be_rejected(
        self, animal_chunks: list[Chunk], completion_client: FakeCompletionClient
    ) -> None:
        service = AskService(completion_client, RetrievalSettings())

        with pytest.raises(MalformedInputError):
            await service.answer(AskRequest(question="   ", chunks=animal_chunks))

        assert completion_client.calls == []

    @pytest.mark.asyncio
    async def test_missing_chunks_should_be_rejected(self, completion_client: FakeCompletionClient) -> None:
        service = AskService(completion_client, RetrievalSettings())

        with pytest.raises(MalformedInputError) as exc_info:
            await service.answer(AskRequest(question="why?", chunks=[Chunk(id="e", text="")]))

        assert "No extracted PDF chunks" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_empty_completion_should_use_fallback_answer(self, animal_chunks: list[Chunk]) -> None:
        service = AskService(FakeCompletionClient(tokens=()), RetrievalSettings())

        response = await service.answer(AskRequest(question="mammals", chunks=animal_chunks))

        assert response.answer == "No answer generated."

    @pytest.mark.asyncio
    async def test_should_bound_supplied_history(
        self, animal_chunks: list[Chunk], completion_client: FakeCompletionClient
    ) -> None:
        service = AskService(completion_client, RetrievalSettings(max_history_turns=1))
        history = [
            {"role": "user", "content": "old question"},
            {"role": "assistant", "content": "old answer"},
            {"role": "user", "content": "recent question"},
            {"role": "assistant", "content": "recent answer"},
        ]

        await service.answer(AskRequest(question="mammals", chunks=animal_chunks, history=history))

        contents = [message["content"] for message in completion_client.calls[0]]
        assert contents[1:] == ["recent question", "recent answer", "mammals"]
