"""
app/classifier/filename_classifier.py

Maps an original upload filename to one of the fixed category labels.

Matching is a case-insensitive substring test against each keyword in
CATEGORY_KEYWORDS, in order; the first hit wins and anything without a
hit is ``uncategorized``.
"""

from __future__ import annotations

from app.core.constants import CATEGORY_KEYWORDS, DEFAULT_CATEGORY
from app.models.upload_models import Category


def classify(original_name: str) -> Category:
    """
    Return the category for ``original_name``. Never raises.

    >>> classify("ilo_dsp.pdf")
    <Category.ILO: 'ilo'>
    """
    name_lower = (original_name or "").lower()
    for keyword, category in CATEGORY_KEYWORDS:
        if keyword in name_lower:
            return Category(category)
    return Category(DEFAULT_CATEGORY)
