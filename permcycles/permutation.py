import logging
from math import gcd
from functools import reduce
from numbers import Integral

import numpy as np
from bidict import bidict

from .actable import Actable, act

logger = logging.getLogger(__name__)

class PermutationError(ValueError):
    """ Raised when input that should describe a permutation does not. """

class SizeMismatchError(PermutationError):
    """ Raised when input has a different length than the permutation it should describe. """

class PermutationTable(Actable):
    """
    Class for representing permutations of range(N) as tables.

    A PermutationTable holds the image of each element: table[i] is where i is sent.
    Tables are immutable and hashable; composition, inversion and so on produce new tables.
    The only way to build a table step by step is through a TableBuilder.

    Tables act on integers, on other Actable objects (including other tables and cycle
    decompositions) and on sequences of those, see act().
    """

#-- Magic methods --#

    def __init__(self, table = None, size = None, check = True):
        """
        Create a permutation table.

        table -- the images of 0, 1, ..., N-1 in order. Any iterable of integers.
        size -- if table is omitted, create the identity permutation of size elements.
                    If table is provided, size is only used for verification.
        check -- if True, verify that table is actually a bijection on range(len(table))
                    and that len(table) == size (if size is given).
                    Only skip this for tables that are bijections by construction.
        """

        if table is None:
            if size is None:
                raise ValueError("Insufficient information to create a permutation")
            if size < 0:
                raise ValueError("Permutation size must be non-negative")
            self._map = tuple(range(size))
        else:
            values = tuple(table)
            if check and not all(isinstance(i, Integral) for i in values):
                raise PermutationError(f"Permutation array {values} contains non-integers")
            self._map = tuple(int(i) for i in values)

        if check:
            if size is not None and len(self._map) != size:
                raise SizeMismatchError(f"Permutation array size ({len(self._map)}) does not match the given size ({size})")
            if not self.is_permutation(self._map):
                raise PermutationError(f"Permutation array {self._map} is not a permutation")

    def __getitem__(self, idx):
        """ Obtain the image of element idx under the permutation. """
        return self._map[idx]

    def __call__(self, x):
        """ Apply the permutation to x, see act(). """
        return self.act(x)

    def __len__(self):
        return len(self._map)

    def __iter__(self):
        """ Get an iterator to the underlying index map. """
        return iter(self._map)

    def __str__(self):
        """ Represent a permutation as (i0 i1 i2 ...) where iN is the image of index N. """
        return f"({' '.join(str(i) for i in self._map)})"
    def __repr__(self):
        return f"PermutationTable({list(self._map)})"

    def __hash__(self):
        return hash(self._map)

    def __mul__(self, other):
        """
        Compose permutations.

        (a * b)[i] == a[b[i]], i.e. a * b first applies b, then a.
        """
        return self.compose(self, other)

    def __pow__(self, power):
        """
        Take a power of a permutation.

        p**power performs the equivalent of power repeated applications of p.
        If power is negative, this gives the inverse permutation raised to abs(power).
        Computed cycle by cycle, so it is linear in len(self) regardless of power.
        """

        perm = list(range(len(self)))
        for cycle in self.decompose():
            for pos, index in enumerate(cycle):
                perm[index] = cycle[(pos+power) % len(cycle)]

        return PermutationTable(perm, check = False)

    def __eq__(self, other):
        if not isinstance(other, PermutationTable):
            return NotImplemented
        return self._map == other._map

    def __lt__(self, other):
        """ Compare two permutations lexicographically by their tables. """
        if not isinstance(other, PermutationTable):
            return NotImplemented
        return self._map < other._map

#-- Generator methods --#

    @staticmethod
    def identity(size):
        """ Generate the identity permutation. """
        return PermutationTable( size=size )

    @staticmethod
    def cyclic(size, offs = 1):
        """
        Generate the cyclic permutation that maps element i to element (i + offs) % size.

        With the default offs = 1 this is the canonical generator of the cyclic group,
        a single cycle of length size.
        """
        if size == 0:
            return PermutationTable.identity(0)
        return PermutationTable( [(i + offs) % size for i in range(size)], check = False )

    @staticmethod
    def transposition(size, i, j):
        """
        Generate the permutation that swaps i and j and fixes everything else.

        Raises IndexError if i or j is not in range(size).
        """
        return TableBuilder(size).swap(i, j).build()

    @staticmethod
    def from_sequence(values, size):
        """
        Rebuild a permutation from a flat sequence of integers, as produced by to_sequence().

        values -- the table entries, which must be a bijection on range(size).
        size -- the expected size. A length mismatch raises SizeMismatchError,
                    anything that is not a permutation raises PermutationError.
        """
        values = list(values)
        if len(values) != size:
            raise SizeMismatchError(f"Expected {size} values, got {len(values)}")
        return PermutationTable(values, size = size)

    def to_sequence(self):
        """ Externalize the permutation as a list of len(self) integers. """
        return list(self._map)

    @staticmethod
    def random(size, rng = None):
        """
        Draw a permutation uniformly at random among all size! permutations.

        rng -- a numpy Generator, or a seed passed to numpy.random.default_rng().

        This is a Fisher-Yates shuffle of the identity.
        """
        rng = np.random.default_rng(rng)
        builder = TableBuilder(size)
        for i in reversed(range(1, size)):
            builder.swap(i, int(rng.integers(0, i + 1)))
        return builder.build()

    @staticmethod
    def from_cycles(decomposition):
        """ Obtain the table of a CycleDecomposition, see CycleDecomposition.to_table(). """
        return decomposition.to_table()

    @staticmethod
    def compose(*perms):
        """
        Compose a list of equal-length permutations, as if by repeated application of *.

        Note that composition acts right-to-left: compose(a, b)[i] == a[b[i]].
        """

        if not perms:
            raise ValueError("Nothing to compose")
        if any(len(perm) != len(perms[0]) for perm in perms):
            raise ValueError("Attempting to compose permutations of different length")

        comp = list(range(len(perms[0])))
        for perm in reversed(perms):
            comp = [perm._map[i] for i in comp]

        return PermutationTable(comp, check = False)

    def inverse(self):
        """ Obtain the inverse of a permutation, such that self * self.inverse() == identity. """

        inv = [0] * len(self)
        for i in range(len(self)):
            inv[ self._map[i] ] = i

        return PermutationTable(inv, check = False)

    def conjugate(self, other):
        """ Equivalent to other * self * other.inverse() """

        if len(self) != len(other):
            raise ValueError("Attempting to conjugate permutations of different length")

        conj = [0] * len(self)
        for i in range(len(self)):
            conj[ other[i] ] = other[ self[i] ]

        return PermutationTable(conj, check = False)

    def on_subset(self, subset):
        """
        Restrict a permutation to a subset of the elements it permutes.

        subset -- a sequence of the same length as self.
            self must map its truthy positions to other truthy positions, and falsy to falsy.
            The restriction has length equal to the number of truthy positions,
            which are relabelled 0, 1, ... in increasing order.
        """

        if len(subset) != len(self):
            raise SizeMismatchError("Target array size mismatch")

        restrict = bidict({})
        j = 0
        for i, elem in enumerate(subset):
            if bool(elem) != bool(subset[self[i]]):
                raise PermutationError("Target subset is not closed under the permutation")
            if bool(elem):
                restrict[i] = j
                j += 1

        return PermutationTable( [restrict[self[restrict.inverse[i]]] for i in range(j)], check = False )

#-- Application of permutations --#

    def act(self, x):
        """
        Apply the permutation as a function.

        Integers are taken modulo len(self); lists, tuples and numpy arrays are mapped
        element by element; Actable objects (such as other tables) decide for themselves.
        """
        return act(self, x)

    def acted_on_by(self, table):
        """ A table acting on another table composes them: table.act(self) == table * self. """
        return table * self

    def permute(self, array):
        """
        Return a reordered copy of an array as a list, such that result[i] == array[self[i]].

        For tables, b.permute(a) == list(a * b).
        """

        if len(array) != len(self):
            raise ValueError("Permuting array of mismatched size")

        return [ array[i] for i in self._map ]

#-- Properties of permutations --#

    @staticmethod
    def is_permutation(array):
        """ Check if a array of indices represents a permutation of range(len(array)). """
        return sorted(array) == list(range(len(array)))

    def is_identity(self):
        """ Check if a permutation is the identity permutation. """
        return all( i == m for i,m in enumerate(self._map) )

    def fixed_points(self):
        """ Obtain the list of fixed points of the permutation, i.e., elements that map to themselves. """
        return [i for i in range(len(self)) if self._map[i] == i]

    def decompose(self):
        """ Obtain the cycle decomposition of the permutation. """
        from .cycles import CycleDecomposition
        return CycleDecomposition.from_table(self)

    def cycle_type(self):
        """ Obtain the cycle type, which identifies the conjugacy class of the permutation. """
        return self.decompose().cycle_type()

    def is_conjugate(self, other):
        """ Check if other == g * self * g.inverse() for some permutation g. """
        return len(self) == len(other) and self.cycle_type() == other.cycle_type()

    def order(self):
        """ Obtain the smallest positive power to which self must be raised to give the identity. """
        return reduce(lambda a,b: (a*b)//gcd(a,b), (len(cycle) for cycle in self.decompose()), 1)

    def parity(self):
        """ Obtain the parity of a permutation: 1 if odd, 0 if even. """
        return self.cycle_type().parity()

class TableBuilder:
    """
    Builder for permutation tables by successive swaps.

    Starts at the identity; since every step swaps two entries, the result is always
    a bijection and needs no validation.
    """

    def __init__(self, size):
        if size < 0:
            raise ValueError("Permutation size must be non-negative")
        self._table = list(range(size))

    def __len__(self):
        return len(self._table)

    def swap(self, i, j):
        """ Swap the images of i and j. Raises IndexError for indices outside range(len(self)). """
        for idx in (i, j):
            if not 0 <= idx < len(self._table):
                raise IndexError(f"Index {idx} out of range for permutation of size {len(self._table)}")

        self._table[i], self._table[j] = self._table[j], self._table[i]
        return self

    def build(self):
        return PermutationTable(self._table, check = False)
