"""
Pole/Zero Digital Filter System

This package turns pole/zero geometries into IIR transfer-function
coefficients and applies them to stereo audio one frame at a time.
"""

from .design.filter_designer import PresetFilterDesigner, FilterDesignService
from .digital_filter import DigitalFilter
from .polynomial import polynomial_from_roots, descending_coefficients

__all__ = [
    'PresetFilterDesigner',
    'FilterDesignService',
    'DigitalFilter',
    'polynomial_from_roots',
    'descending_coefficients'
]
