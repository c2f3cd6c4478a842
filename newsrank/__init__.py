"""
newsrank - Article Classification & Placement Ranking Engine

Assigns news articles a category, subcategory, breaking flag and priority
from keyword analysis, ranks them for the five homepage placements, and
validates hero candidates against a quality rubric.
"""

__version__ = "0.1.0"
