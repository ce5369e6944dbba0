"""
Pole/zero editing: addressable root storage and the z-plane editing rules.
"""

from .root_arena import RootArena
from .pole_zero_editor import PoleZeroEditor

__all__ = ['RootArena', 'PoleZeroEditor']
