"""Pipeline services: extraction, chunking, embedding and answer synthesis."""

from docqa.services.answer_synthesizer import AnswerSynthesizer
from docqa.services.chunker import TextChunker
from docqa.services.embedding_batcher import EmbeddingBatcher
from docqa.services.text_extractor import TextExtractor

__all__ = [
    "AnswerSynthesizer",
    "EmbeddingBatcher",
    "TextChunker",
    "TextExtractor",
]
