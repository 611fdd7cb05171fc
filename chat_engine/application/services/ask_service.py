"""
Stateless question answering.

Answers a single question against chunks supplied in the request, without
session state or streaming to the caller.

Dependencies: chat_engine.core
System role: Request/response Q&A orchestration
"""

import logging
from contextlib import aclosing

from chat_engine.configs.retrieval import RetrievalSettings
from chat_engine.core.exceptions import MalformedInputError
from chat_engine.core.interfaces import CompletionClient
from chat_engine.core.prompts.grounding_prompt import build_citations, build_system_prompt
from chat_engine.core.retrieval.assembler import ContextBudget
from chat_engine.core.retrieval.selector import select_context_lexical
from chat_engine.models.chat import AskRequest, AskResponse

logger = logging.getLogger(__name__)

NO_ANSWER = "No answer generated."


class AskService:
    """One-shot grounded answers over request-supplied chunks."""

    def __init__(self, completion_client: CompletionClient, retrieval: RetrievalSettings) -> None:
        self.completion_client = completion_client
        self.budget = ContextBudget.from_settings(retrieval)
        self.history_limit = retrieval.max_history_turns * 2

    async def answer(self, request: AskRequest) -> AskResponse:
        """
        Answer a question.

        Raises:
            MalformedInputError: If the question is blank or no chunk has text
            CompletionEndpointError: If the completion endpoint fails
        """
        question = request.question.strip()
        if not question:
            raise MalformedInputError("Missing required field: question")

        chunks = [chunk for chunk in request.chunks if chunk.text]
        if not chunks:
            raise MalformedInputError("No extracted PDF chunks available. Upload and extract first.")

        selected = select_context_lexical(chunks, question, self.budget)
        history = request.history[-self.history_limit:] if self.history_limit else []

        messages = [{"role": "system", "content": build_system_prompt(selected)}]
        messages.extend(turn.to_message() for turn in history)
        messages.append({"role": "user", "content": question})

        parts: list[str] = []
        async with aclosing(self.completion_client.stream_chat(messages)) as fragments:
            async for fragment in fragments:
                parts.append(fragment.content)
                if fragment.done:
                    break

        logger.info("Answered question", extra={"selected": len(selected), "history": len(history)})
        return AskResponse(
            answer="".join(parts).strip() or NO_ANSWER,
            citations=build_citations(selected),
        )
