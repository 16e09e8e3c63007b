import logging

from .actable import Actable, act
from .permutation import PermutationTable, TableBuilder, PermutationError, SizeMismatchError
from .cycle_type import CycleType
from .cycles import Cycle, CycleDecomposition
from .group import Group, CyclicGroup, SymmetricGroup

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Actable', 'act',
    'PermutationTable', 'TableBuilder', 'PermutationError', 'SizeMismatchError',
    'CycleType',
    'Cycle', 'CycleDecomposition',
    'Group', 'CyclicGroup', 'SymmetricGroup',
]
