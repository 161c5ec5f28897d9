"""Document source implementations.

HttpDocumentSource fetches document bytes over HTTP(S) with httpx.
"""

from docqa.providers.document_source.http_document_source import HttpDocumentSource

__all__ = ["HttpDocumentSource"]
