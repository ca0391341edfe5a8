"""webtext: main-text extraction for arbitrary web pages."""

from webtext.pipeline import ExtractionPipeline, ExtractionRequest, extract_text

__all__ = ["ExtractionPipeline", "ExtractionRequest", "extract_text"]

__version__ = "0.1.0"
