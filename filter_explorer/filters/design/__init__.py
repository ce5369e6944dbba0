"""
Preset filter design: generators and the designer that dispatches to them.
"""

from .filter_designer import PresetFilterDesigner, FilterDesignService

__all__ = ['PresetFilterDesigner', 'FilterDesignService']
