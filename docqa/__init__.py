"""docqa: question answering over PDF, DOCX and plain-text documents."""

__version__ = "0.1.0"
