"""Grounded answer synthesis from retrieved document sections.

Builds a prompt from the retrieved chunk texts and the user's question,
asks the LLM for an answer constrained to that context, and attaches a
locally computed explanation of what the answer was based on.
"""

from __future__ import annotations

import structlog

from docqa.interfaces.llm_provider import ILLMProvider
from docqa.models.rag import RetrievalMatch, SynthesizedAnswer
from docqa.utils.errors import AnswerSynthesisError, LLMError
from docqa.utils.logging import get_logger

logger: structlog.BoundLogger = get_logger(__name__)


class AnswerSynthesizer:
    """Writes an answer to a question from a set of retrieval matches.

    Parameters
    ----------
    llm:
        LLM provider used for the completion.
    max_tokens:
        Upper bound on answer length (default 1000).
    temperature:
        Sampling temperature (default 0.3).
    """

    _SYSTEM_PROMPT = (
        "You are a professional document analysis assistant. Provide accurate, "
        "detailed answers based on the provided context. Always cite specific "
        "sections when possible."
    )

    _USER_PROMPT_TEMPLATE = (
        "You are an intelligent query retrieval system specialized in insurance, "
        "legal, HR, and compliance domains.\n\n"
        "Context from relevant document sections:\n"
        "{context}\n\n"
        "User Query: {query}\n\n"
        "Please provide a comprehensive answer based on the context above. If the "
        "information is not available in the context, clearly state that. Be "
        "specific and include relevant details, conditions, and limitations "
        "mentioned in the documents.\n\n"
        "Answer:"
    )

    def __init__(
        self,
        llm: ILLMProvider,
        max_tokens: int = 1000,
        temperature: float = 0.3,
    ) -> None:
        self._llm = llm
        self._max_tokens = max_tokens
        self._temperature = temperature

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def synthesize(
        self, query: str, matches: list[RetrievalMatch]
    ) -> SynthesizedAnswer:
        """Answer *query* from *matches*.

        Every match text goes into the prompt, in the given order.  With no
        matches the completion is still requested, so the model can say the
        document does not cover the question.

        Raises
        ------
        AnswerSynthesisError
            If the LLM call fails.
        """
        user_prompt = self.build_user_prompt(query, matches)

        try:
            answer = await self._llm.complete(
                system_prompt=self._SYSTEM_PROMPT,
                user_prompt=user_prompt,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except LLMError as exc:
            logger.error("answer_synthesis_failed", error=str(exc), query=query[:80])
            raise AnswerSynthesisError(
                message=f"LLM completion failed: {exc.message}",
                provider_name=exc.provider_name,
            ) from exc
        except Exception as exc:
            logger.error("answer_synthesis_failed", error=str(exc), query=query[:80])
            raise AnswerSynthesisError(
                message=f"LLM completion failed: {exc}",
                provider_name=self._llm.get_provider_name(),
            ) from exc

        logger.info(
            "answer_synthesized",
            query=query[:80],
            sections=len(matches),
            answer_length=len(answer),
        )
        return SynthesizedAnswer(answer=answer, explanation=self.explain(matches))

    # ------------------------------------------------------------------
    # Prompt and explanation building
    # ------------------------------------------------------------------

    @classmethod
    def build_user_prompt(cls, query: str, matches: list[RetrievalMatch]) -> str:
        """Return the user prompt: all match texts, then the question."""
        context = "\n\n".join(match.chunk_text for match in matches)
        return cls._USER_PROMPT_TEMPLATE.format(context=context, query=query)

    @staticmethod
    def explain(matches: list[RetrievalMatch]) -> str:
        """Summarize how many sections backed the answer and their score range."""
        if not matches:
            return "No relevant document sections were retrieved for this query"
        scores = [match.score for match in matches]
        return (
            f"Based on {len(matches)} relevant document sections with similarity "
            f"scores ranging from {min(scores):.4f} to {max(scores):.4f}"
        )
