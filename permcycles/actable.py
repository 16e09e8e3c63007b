import logging
from abc import ABC, abstractmethod
from numbers import Integral
import collections.abc

import numpy as np

logger = logging.getLogger(__name__)

class Actable(ABC):
    """
    Interface for values that a permutation table knows how to act on.

    Integers (taken modulo the table size) are always actable. Anything else opts in
    by subclassing Actable and implementing acted_on_by(). Sequences of actable values
    are then handled by act() without any further work, element by element.
    """

    @abstractmethod
    def acted_on_by(self, table):
        """ Return the result of applying table to self. Must not modify self. """
        pass

def act(table, x):
    """
    Apply a permutation table to x.

    table -- anything indexable by range(len(table)), normally a PermutationTable.
    x -- one of:
        an integer, mapped to table[x % len(table)];
        an Actable, which decides for itself through acted_on_by();
        an integer numpy array, mapped element-wise (same shape, new array);
        a list or tuple (or other sequence) of any of the above, mapped element-wise
            with order preserved. Lists and tuples keep their type, other sequences
            are returned as lists.

    Strings and bytes are rejected even though they are sequences, since acting on
    their characters is almost certainly a mistake.

    For tables T, U this satisfies act(T * U, x) == act(T, act(U, x)).
    An empty table has nothing to map integers to and raises IndexError for them.
    """

    if isinstance(x, Integral):
        if not len(table):
            raise IndexError(f"Cannot act on {x} with a permutation of size 0")
        return table[x % len(table)]

    if isinstance(x, Actable):
        return x.acted_on_by(table)

    if isinstance(x, np.ndarray):
        if not np.issubdtype(x.dtype, np.integer):
            raise TypeError(f"Cannot act on array of dtype {x.dtype}")
        if not len(table) and x.size:
            raise IndexError("Cannot act on a non-empty array with a permutation of size 0")
        return np.asarray(tuple(table), dtype=x.dtype)[x % len(table)]

    if isinstance(x, (str, bytes, bytearray)):
        raise TypeError(f"Cannot act on {type(x).__name__}")

    if isinstance(x, collections.abc.Sequence):
        acted = [act(table, elem) for elem in x]
        if isinstance(x, tuple):
            return tuple(acted)
        return acted

    raise TypeError(f"Permutations cannot act on {type(x).__name__}")
