"""
Utility helpers for tspkit.

• Compact triangular matrix index arithmetic (`indexing.py`).
• Logging colour codes and progress bars (`logging.py`).
"""

from .indexing import compact_length, to_coords, to_index

__all__ = [
    "compact_length",
    "to_coords",
    "to_index",
]
