"""
Addressable storage for the roots of one polynomial.

Roots are referenced by stable integer handles instead of object identity,
so an editor can keep a selection across edits while the engine works on
snapshots that never alias the edited values.
"""

from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from filter_explorer.complex_number import Complex
from filter_explorer.exceptions import RootNotFoundError


class RootArena:
    """Ordered collection of roots keyed by handle"""

    def __init__(self):
        self._roots: Dict[int, Complex] = {}
        self._next_handle = 1

    @classmethod
    def from_roots(cls, roots: Iterable[Complex]) -> 'RootArena':
        arena = cls()
        for root in roots:
            arena.add(root)
        return arena

    def add(self, value: Complex) -> int:
        """
        Store a copy of ``value``.

        Returns:
            Handle of the new root
        """
        handle = self._next_handle
        self._next_handle += 1
        self._roots[handle] = value.copy()
        return handle

    def get(self, handle: int) -> Complex:
        try:
            return self._roots[handle]
        except KeyError:
            raise RootNotFoundError(handle) from None

    def move(self, handle: int, value: Complex) -> None:
        """Overwrite the root at ``handle`` in place"""
        root = self.get(handle)
        root.real = value.real
        root.imaginary = value.imaginary

    def remove(self, handle: int) -> Complex:
        try:
            return self._roots.pop(handle)
        except KeyError:
            raise RootNotFoundError(handle) from None

    def clear(self) -> None:
        self._roots.clear()

    def handles(self) -> List[int]:
        return list(self._roots.keys())

    def items(self) -> Iterator[Tuple[int, Complex]]:
        return iter(list(self._roots.items()))

    def find(self, predicate: Callable[[int, Complex], bool]) -> Optional[int]:
        """Handle of the first root, in insertion order, matching ``predicate``"""
        for handle, root in self._roots.items():
            if predicate(handle, root):
                return handle
        return None

    def snapshot(self) -> List[Complex]:
        """Copies of all roots in insertion order"""
        return [root.copy() for root in self._roots.values()]

    def __contains__(self, handle: int) -> bool:
        return handle in self._roots

    def __len__(self) -> int:
        return len(self._roots)
