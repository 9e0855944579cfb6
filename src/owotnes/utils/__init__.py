"""
Utility functions for the bridge
"""

from .colors import bgr_to_rgb

__all__ = [
    'bgr_to_rgb',
]
