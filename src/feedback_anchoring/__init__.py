"""Feedback anchoring - keeps review annotations attached to student text.

Core pieces:
- Anchor validation (fuzzy check of stored offsets against current text)
- Overlap-resolving segmentation and paragraph slicing for rendering
- Debounced highlight synchronization between annotation cards and text spans
"""

__version__ = "0.1.0"
