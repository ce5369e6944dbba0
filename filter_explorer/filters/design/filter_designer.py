"""
Preset filter design.

This module maps the tagged preset parameter objects onto the preset
generators and provides a caching service on top of it.
"""

import logging
from typing import Callable, Dict

from filter_explorer.exceptions import (
    FilterDesignError, InvalidFilterSpecificationError,
    UnsupportedFilterOrderError, UnsupportedFilterTypeError
)
from filter_explorer.interfaces import (
    Bessel, Butterworth, ChebyshevI, Comb, FilterDescriptor, FilterFamily,
    FilterPreset, LeakyIntegrator, MovingAverage
)
from filter_explorer.filters.design import presets

logger = logging.getLogger('filter_explorer.filters.design.filter_designer')

class PresetFilterDesigner:
    """
    Designs pole/zero descriptors from preset parameters.

    Each filter family has its own design strategy; parameters are already
    validated by the preset objects themselves.
    """

    def __init__(self):
        """Initialize filter designer with strategy mapping"""
        self._design_strategies: Dict[FilterFamily, Callable[[FilterPreset], FilterDescriptor]] = {
            FilterFamily.MOVING_AVERAGE: self._design_moving_average,
            FilterFamily.LEAKY_INTEGRATOR: self._design_leaky_integrator,
            FilterFamily.BUTTERWORTH: self._design_butterworth,
            FilterFamily.CHEBYSHEV_I: self._design_chebyshev1,
            FilterFamily.BESSEL: self._design_bessel,
            FilterFamily.COMB: self._design_comb,
        }

        logger.info("PresetFilterDesigner initialized")

    def design(self, preset: FilterPreset) -> FilterDescriptor:
        """
        Design a filter from preset parameters.

        Args:
            preset: One of the per-family preset objects

        Returns:
            Zeros, poles and normalization target of the design

        Raises:
            UnsupportedFilterTypeError: If the preset family is not supported
            UnsupportedFilterOrderError: If the family has no design for the order
            FilterDesignError: If design fails
        """
        try:
            family = getattr(preset, 'family', None)
            design_func = self._design_strategies.get(family)
            if not design_func:
                raise UnsupportedFilterTypeError(f"Filter preset {preset!r} not supported")

            logger.debug(f"Designing {family.value} filter: {preset}")

            descriptor = design_func(preset)

            logger.info(f"Designed {family.value} filter with {len(descriptor.zeros)} zero(s) "
                        f"and {len(descriptor.poles)} pole(s)")
            return descriptor

        except (UnsupportedFilterTypeError, UnsupportedFilterOrderError,
                InvalidFilterSpecificationError):
            raise
        except Exception as e:
            logger.error(f"Filter design failed: {e}")
            raise FilterDesignError(f"Failed to design filter: {e}") from e

    def supported_families(self) -> list:
        return list(self._design_strategies.keys())

    def _design_moving_average(self, preset: MovingAverage) -> FilterDescriptor:
        return presets.moving_average(preset.order)

    def _design_leaky_integrator(self, preset: LeakyIntegrator) -> FilterDescriptor:
        return presets.leaky_integrator(preset.lambda_)

    def _design_butterworth(self, preset: Butterworth) -> FilterDescriptor:
        return presets.butterworth(preset.cutoff, preset.order, preset.lowpass)

    def _design_chebyshev1(self, preset: ChebyshevI) -> FilterDescriptor:
        return presets.chebyshev_type_i(preset.cutoff, preset.order, preset.ripple, preset.lowpass)

    def _design_bessel(self, preset: Bessel) -> FilterDescriptor:
        return presets.bessel(preset.cutoff, preset.order, preset.lowpass)

    def _design_comb(self, preset: Comb) -> FilterDescriptor:
        return presets.comb(preset.alpha, preset.delay, preset.feedforward)


class FilterDesignService:
    """
    Filter design with descriptor caching.

    Presets are frozen dataclasses and serve directly as cache keys. Cached
    descriptors are never handed out; callers always receive a copy they may
    edit freely.
    """

    def __init__(self, designer: PresetFilterDesigner):
        """
        Initialize filter design service.

        Args:
            designer: Filter designer implementation
        """
        self._designer = designer
        self._descriptor_cache: Dict[FilterPreset, FilterDescriptor] = {}
        self._cache_hits = 0
        self._cache_misses = 0

        logger.info("FilterDesignService initialized")

    def get_or_create_filter(self, preset: FilterPreset) -> FilterDescriptor:
        """
        Get a cached design or create a new one.

        Args:
            preset: Preset parameters

        Returns:
            A private copy of the filter descriptor
        """
        if preset in self._descriptor_cache:
            self._cache_hits += 1
            logger.debug(f"Cache hit for filter: {preset}")
            return self._descriptor_cache[preset].copy()

        self._cache_misses += 1
        logger.debug(f"Cache miss for filter: {preset}")

        descriptor = self._designer.design(preset)
        self._descriptor_cache[preset] = descriptor.copy()

        return descriptor

    def clear_cache(self) -> None:
        """Clear descriptor cache and reset statistics"""
        cache_size = len(self._descriptor_cache)
        self._descriptor_cache.clear()

        logger.info(f"Cleared filter cache ({cache_size} entries). "
                    f"Cache stats: {self._cache_hits} hits, {self._cache_misses} misses")

        self._cache_hits = 0
        self._cache_misses = 0

    def get_cache_stats(self) -> Dict[str, float]:
        """Get cache performance statistics"""
        total_requests = self._cache_hits + self._cache_misses
        hit_rate = (self._cache_hits / total_requests * 100) if total_requests > 0 else 0

        return {
            'cache_size': len(self._descriptor_cache),
            'cache_hits': self._cache_hits,
            'cache_misses': self._cache_misses,
            'hit_rate_percent': round(hit_rate, 2)
        }
