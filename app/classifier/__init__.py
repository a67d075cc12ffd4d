"""app/classifier/__init__.py — public API of the classifier package."""

from app.classifier.filename_classifier import classify

__all__ = ["classify"]
