"""LLM provider adapters.

Three concrete implementations of ILLMProvider (docqa/interfaces/llm_provider.py):
    - OpenAILLMProvider    — gpt-4 (also supports OpenAI-compatible APIs)
    - AnthropicLLMProvider — Claude Sonnet
    - OllamaLLMProvider    — local models via Ollama server (llama3.1)

``docqa.main`` builds the one named by ``LLM_PROVIDER``.
"""

from docqa.providers.llm.anthropic_provider import AnthropicLLMProvider
from docqa.providers.llm.ollama_provider import OllamaLLMProvider
from docqa.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["OpenAILLMProvider", "AnthropicLLMProvider", "OllamaLLMProvider"]
