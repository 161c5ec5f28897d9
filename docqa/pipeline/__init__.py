"""Pipeline orchestration for document question answering."""

from docqa.pipeline.orchestrator import DocumentQAPipeline, new_namespace

__all__ = [
    "DocumentQAPipeline",
    "new_namespace",
]
