"""
Recognition collaborators (OCR, object classification) behind one context.
"""

from .context import (
    ObjectClassifier,
    RecognitionContext,
    TextReader,
    create_easyocr_reader,
)

__all__ = [
    "ObjectClassifier",
    "RecognitionContext",
    "TextReader",
    "create_easyocr_reader",
]
