"""
Interactive pole/zero editing.

Implements the editing rules of the z-plane display independently of any
UI toolkit: roots dragged off the real axis bring their complex conjugate
along, roots dragged close to the axis snap onto it, and poles are kept
strictly inside the unit circle. Every edit recomputes the engine from
snapshots of the root arenas.
"""

import logging
from typing import List, Optional, Tuple

from filter_explorer.complex_number import Complex
from filter_explorer.core.config_manager import ExplorerConfiguration
from filter_explorer.editing.root_arena import RootArena
from filter_explorer.exceptions import FilterInstabilityError
from filter_explorer.filters.design.filter_designer import PresetFilterDesigner
from filter_explorer.filters.digital_filter import DigitalFilter
from filter_explorer.interfaces import (
    CoefficientPair, FilterDescriptor, FilterPreset, RootKind
)

logger = logging.getLogger('filter_explorer.editing.pole_zero_editor')

class PoleZeroEditor:
    """
    Edits the zeros and poles of a ``DigitalFilter``.

    The editor owns one ``RootArena`` per polynomial; handles returned by
    ``add`` and ``hit_test`` stay valid until the root is removed or a new
    design is loaded.
    """

    def __init__(self, engine: DigitalFilter,
                 config: Optional[ExplorerConfiguration] = None,
                 designer: Optional[PresetFilterDesigner] = None):
        """
        Initialize the editor from the engine's current design.

        Args:
            engine: Filter engine to keep in sync with the edits
            config: Editing tolerances; defaults when omitted
            designer: Preset designer used by ``apply_preset``
        """
        self._engine = engine
        self._config = config or ExplorerConfiguration()
        self._designer = designer or PresetFilterDesigner()
        self.zeros = RootArena.from_roots(engine.zeros)
        self.poles = RootArena.from_roots(engine.poles)

    def arena(self, kind: RootKind) -> RootArena:
        return self.zeros if kind is RootKind.ZERO else self.poles

    def load(self, descriptor: FilterDescriptor) -> CoefficientPair:
        """
        Replace the whole design.

        Raises:
            FilterInstabilityError: In strict mode, if a pole is on or
                outside the unit circle
        """
        if self._config.strict_stability:
            unstable = [p for p in descriptor.poles if not p.modulus() < 1.0]
            if unstable:
                raise FilterInstabilityError(
                    f"Filter is unstable. Poles outside the unit circle: "
                    f"{', '.join(str(p) for p in unstable)}"
                )

        self.zeros = RootArena.from_roots(descriptor.zeros)
        self.poles = RootArena.from_roots(descriptor.poles)

        logger.debug(f"Loaded design with {len(self.zeros)} zero(s) and {len(self.poles)} pole(s)")
        return self._engine.compute(FilterDescriptor(
            zeros=self.zeros.snapshot(),
            poles=self.poles.snapshot(),
            normalize=descriptor.normalize
        ))

    def apply_preset(self, preset: FilterPreset) -> CoefficientPair:
        return self.load(self._designer.design(preset))

    def add(self, kind: RootKind, z: Complex) -> int:
        """
        Add a root, together with its conjugate when it is not real.

        Returns:
            Handle of the added root
        """
        arena = self.arena(kind)
        value = z.copy()
        if kind is RootKind.POLE:
            self._clamp_pole(value)

        if abs(value.imaginary) > self._config.snap_size:
            handle = arena.add(value)
            arena.add(value.conjugate())
        else:
            value.imaginary = 0.0
            handle = arena.add(value)

        self._recompute()
        return handle

    def move(self, kind: RootKind, handle: int, z: Complex) -> Complex:
        """
        Drag a root to ``z``.

        Returns:
            The root's new position after clamping and snapping
        """
        arena = self.arena(kind)
        selection = arena.get(handle)
        # A real root's match is a repeated root, not a partner
        conjugate_handle = None if selection.is_real() else self._find_conjugate(arena, handle)
        needs_conjugate = abs(z.imaginary) > self._config.snap_size

        arena.move(handle, z)
        if kind is RootKind.POLE:
            self._clamp_pole(selection)

        if needs_conjugate:
            if conjugate_handle is not None:
                arena.move(conjugate_handle, selection.conjugate())
            else:
                arena.add(selection.conjugate())
        else:
            if conjugate_handle is not None:
                arena.remove(conjugate_handle)
            selection.imaginary = 0.0

        self._recompute()
        return selection.copy()

    def remove(self, kind: RootKind, handle: int) -> None:
        """Remove a root and, if it is not real, its conjugate partner"""
        arena = self.arena(kind)
        root = arena.get(handle)
        conjugate_handle = None if root.is_real() else self._find_conjugate(arena, handle)

        arena.remove(handle)
        if conjugate_handle is not None:
            arena.remove(conjugate_handle)

        self._recompute()

    def hit_test(self, z: Complex) -> Optional[Tuple[RootKind, int]]:
        """
        Find the root under a cursor position.

        Zeros take precedence over poles.

        Returns:
            ``(kind, handle)`` of the first root within the hit tolerance
        """
        tolerance = self._config.hit_tolerance
        for kind in (RootKind.ZERO, RootKind.POLE):
            handle = self.arena(kind).find(
                lambda _, root: Complex.subtract(root, z).modulus_squared() < tolerance
            )
            if handle is not None:
                return kind, handle
        return None

    def multiplicities(self, kind: RootKind) -> List[Tuple[Complex, int]]:
        """Distinct roots with their multiplicity, in insertion order"""
        groups: List[List] = []
        for _, root in self.arena(kind).items():
            for group in groups:
                if Complex.are_equal(group[0], root):
                    group[1] += 1
                    break
            else:
                groups.append([root.copy(), 1])
        return [(root, count) for root, count in groups]

    def _find_conjugate(self, arena: RootArena, handle: int) -> Optional[int]:
        selection = arena.get(handle)
        return arena.find(
            lambda other_handle, root: (
                other_handle != handle and
                abs(root.real - selection.real) < Complex.EPSILON and
                abs(-root.imaginary - selection.imaginary) < Complex.EPSILON
            )
        )

    def _clamp_pole(self, pole: Complex) -> None:
        limit = self._config.max_pole_modulus
        if pole.modulus() >= limit:
            pole.scale_modulus_to(limit)

    def _recompute(self) -> CoefficientPair:
        return self._engine.compute(FilterDescriptor(
            zeros=self.zeros.snapshot(),
            poles=self.poles.snapshot(),
            normalize=self._engine.normalize
        ))
