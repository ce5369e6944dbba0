"""
Audio-side glue between a host audio callback and the filter engine.
"""

from .block_processor import BlockProcessor

__all__ = ['BlockProcessor']
