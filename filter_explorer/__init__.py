"""
Filter Explorer

Design digital IIR filters by placing poles and zeros or by picking a
parametric family, and apply them to stereo audio in real time.

Key Components:
- Complex: complex number value type used throughout the design code
- DigitalFilter: coefficient computation, transfer function and processing
- PresetFilterDesigner: moving average, leaky integrator, Butterworth,
  Chebyshev I, Bessel and comb designs
- PoleZeroEditor: z-plane editing rules on top of a DigitalFilter
- BlockProcessor: runs the engine over audio callback blocks
"""

from .complex_number import Complex, InvalidOperandError
from .exceptions import (
    FilterDesignError, FilterProcessingError, InvalidFilterSpecificationError,
    FilterInstabilityError, UnsupportedFilterTypeError, UnsupportedFilterOrderError,
    NonMonicDenominatorError, RootNotFoundError
)
from .interfaces import (
    FilterFamily, RootKind, NormalizationSpec, FilterDescriptor, CoefficientPair,
    ChannelHistory, StereoHistory, FrequencyResponse, FilterPreset,
    MovingAverage, LeakyIntegrator, Butterworth, ChebyshevI, Bessel, Comb
)
from .filters import (
    DigitalFilter, PresetFilterDesigner, FilterDesignService,
    polynomial_from_roots, descending_coefficients
)
from .editing import RootArena, PoleZeroEditor
from .audio import BlockProcessor

__version__ = "1.0.0"

__all__ = [
    'Complex',
    'InvalidOperandError',
    'FilterDesignError',
    'FilterProcessingError',
    'InvalidFilterSpecificationError',
    'FilterInstabilityError',
    'UnsupportedFilterTypeError',
    'UnsupportedFilterOrderError',
    'NonMonicDenominatorError',
    'RootNotFoundError',
    'FilterFamily',
    'RootKind',
    'NormalizationSpec',
    'FilterDescriptor',
    'CoefficientPair',
    'ChannelHistory',
    'StereoHistory',
    'FrequencyResponse',
    'FilterPreset',
    'MovingAverage',
    'LeakyIntegrator',
    'Butterworth',
    'ChebyshevI',
    'Bessel',
    'Comb',
    'DigitalFilter',
    'PresetFilterDesigner',
    'FilterDesignService',
    'polynomial_from_roots',
    'descending_coefficients',
    'RootArena',
    'PoleZeroEditor',
    'BlockProcessor'
]
