import logging
import collections.abc
from numbers import Integral

from .actable import Actable
from .cycle_type import CycleType
from .permutation import PermutationTable, PermutationError

logger = logging.getLogger(__name__)

class Cycle(collections.abc.Sequence):
    """
    Read-only view of one cycle of a CycleDecomposition.

    The elements are listed in successor order: the permutation sends cycle[j] to
    cycle[(j+1) % len(cycle)]. The view does not copy anything; it is only valid as long
    as its decomposition is not normalized or otherwise rewritten.
    """

    __slots__ = ('_owner', '_start', '_stop')

    def __init__(self, owner, start, stop):
        self._owner = owner
        self._start = start
        self._stop = stop

    def __len__(self):
        return self._stop - self._start

    def __getitem__(self, idx):
        if isinstance(idx, slice):
            return [self[i] for i in range(*idx.indices(len(self)))]
        if idx < 0:
            idx += len(self)
        if not 0 <= idx < len(self):
            raise IndexError(f"Cycle index {idx} out of range")
        return self._owner._enumeration[self._start + idx]

    def __iter__(self):
        enumeration = self._owner._enumeration
        for i in range(self._start, self._stop):
            yield enumeration[i]

    def __eq__(self, other):
        if isinstance(other, Cycle):
            return self.to_tuple() == other.to_tuple()
        return NotImplemented

    # contents follow the owner, which normalize() rewrites in place
    __hash__ = None

    def __str__(self):
        return f"({' '.join(str(c) for c in self)})"
    def __repr__(self):
        return f"Cycle{self.to_tuple()}"

    def successor(self, x):
        """ Obtain the image of x, which must be an element of this cycle. """
        pos = self.index(x)
        return self[(pos + 1) % len(self)]

    def to_tuple(self):
        return tuple(self)

class CycleDecomposition(Actable):
    """
    Class for representing permutations as a partition of range(N) into cycles.

    All cycles share one flat list, the enumeration, which holds every element exactly once.
    The elements of each cycle are contiguous and listed in successor order, and the list of
    starts holds the offset of each cycle, so cycle k is enumeration[starts[k]:starts[k+1]]
    (the last one running to the end).

    Equality compares that representation, not the permutation it denotes:
    the same permutation can be written with cycles listed from any of their elements,
    and in any order. Normalize both sides first to compare permutations.
    """

    def __init__(self, enumeration, starts, check = True):
        """
        Create a decomposition from its flat representation.

        enumeration -- every element of range(N) exactly once, cycle after cycle.
        starts -- the strictly increasing offsets of each cycle into enumeration,
                    beginning with 0 (empty if N == 0).
        check -- if True, verify both of the above.
        """
        enumeration = list(enumeration)
        starts = list(starts)
        if check and not all(isinstance(i, Integral) for i in enumeration + starts):
            raise PermutationError(f"Decomposition {enumeration}, {starts} contains non-integers")
        self._enumeration = [int(e) for e in enumeration]
        self._starts = [int(s) for s in starts]

        if check:
            size = len(self._enumeration)
            if not PermutationTable.is_permutation(self._enumeration):
                raise PermutationError(f"Enumeration {self._enumeration} does not list each element of range({size}) once")
            if size == 0:
                if self._starts:
                    raise PermutationError("Empty decomposition cannot have cycles")
            elif not self._starts or self._starts[0] != 0:
                raise PermutationError("The first cycle must start at offset 0")
            if any(a >= b for a, b in zip(self._starts, self._starts[1:])):
                raise PermutationError(f"Cycle starts {self._starts} are not strictly increasing")
            if self._starts and self._starts[-1] >= size:
                raise PermutationError(f"Cycle start {self._starts[-1]} beyond the end of the enumeration")

    @staticmethod
    def from_table(table):
        """
        Decompose a permutation table into cycles.

        Cycles are discovered by following each element's orbit, seeded from the lowest
        element not visited yet, so fixed points come out as cycles of length 1.
        Each cycle is listed from its seed, which is therefore its least element,
        and cycles are ordered by seed.
        """

        size = len(table)
        visited = [False] * size
        enumeration = []
        starts = []

        for seed in range(size):
            if visited[seed]:
                continue

            starts.append(len(enumeration))
            j = seed
            while not visited[j]:
                visited[j] = True
                enumeration.append(j)
                j = table[j]

        logger.debug("Decomposed permutation of size %d into %d cycles", size, len(starts))
        return CycleDecomposition(enumeration, starts, check = False)

    @staticmethod
    def from_cycles(size, *cycles):
        """
        Create a decomposition from explicitly given cycles.

        size -- the size N of the permutation.
        cycles -- sequences of elements in successor order, starting anywhere in the cycle,
            in any order relative to each other.
            Elements of range(size) that appear in no cycle are fixed points and are added
            as cycles of length 1, in increasing order, after the given cycles.
        """

        enumeration = []
        starts = []
        seen = [False] * size

        for cycle in cycles:
            if not len(cycle):
                raise PermutationError("Cycles must be non-empty")
            starts.append(len(enumeration))
            for elem in cycle:
                if not isinstance(elem, Integral) or not 0 <= elem < size:
                    raise PermutationError(f"Cycle element {elem} out of range for size {size}")
                if seen[elem]:
                    raise PermutationError(f"Element {elem} appears in more than one place")
                seen[elem] = True
                enumeration.append(elem)

        for elem in range(size):
            if not seen[elem]:
                starts.append(len(enumeration))
                enumeration.append(elem)

        return CycleDecomposition(enumeration, starts, check = False)

    @property
    def enumeration(self):
        return tuple(self._enumeration)

    @property
    def starts(self):
        return tuple(self._starts)

    @property
    def size(self):
        """ The size N of the permuted set range(N). """
        return len(self._enumeration)

    def __len__(self):
        """ The number of cycles. """
        return len(self._starts)

    def _bounds(self):
        return zip(self._starts, self._starts[1:] + [len(self._enumeration)])

    def __iter__(self):
        """ Iterate over the cycles as Cycle views, in order of their starts. """
        for start, stop in self._bounds():
            yield Cycle(self, start, stop)

    def __getitem__(self, idx):
        """ Obtain the Cycle view of cycle number idx. """
        bounds = list(self._bounds())
        start, stop = bounds[idx]
        return Cycle(self, start, stop)

    def __eq__(self, other):
        if not isinstance(other, CycleDecomposition):
            return NotImplemented
        return self._enumeration == other._enumeration and self._starts == other._starts

    # mutable through normalize()
    __hash__ = None

    def __str__(self):
        """ Write the decomposition in cycle notation, including cycles of length 1. """
        if not self._starts:
            return '()'
        return ''.join(str(cycle) for cycle in self)
    def __repr__(self):
        return f"CycleDecomposition({self._enumeration}, {self._starts})"

    def copy(self):
        return CycleDecomposition(self._enumeration, self._starts, check = False)

    def to_table(self):
        """
        Convert back to a permutation table, sending every element to its successor in its cycle.

        This is the inverse of from_table(): it depends only on the successors, not on where
        each cycle is listed from or in which order the cycles come.
        """

        table = [0] * self.size
        for start, stop in self._bounds():
            for i in range(start, stop - 1):
                table[ self._enumeration[i] ] = self._enumeration[i + 1]
            table[ self._enumeration[stop - 1] ] = self._enumeration[start]

        return PermutationTable(table, check = False)

    def normalize(self):
        """
        Rewrite the decomposition in canonical form, in place, and return it.

        Each cycle is rotated so that it starts with its largest element, and cycles are
        sorted by that first element, increasing. Cycles of length 1 are treated like any other.
        Two decompositions of the same permutation are equal after normalization,
        and normalizing twice changes nothing.

        Any Cycle views obtained before this call are invalidated.
        """

        cycles = []
        for start, stop in self._bounds():
            cycle = self._enumeration[start:stop]
            max_idx = cycle.index(max(cycle))
            cycles.append( cycle[max_idx:] + cycle[:max_idx] )

        cycles.sort(key = lambda c: c[0])

        enumeration = []
        starts = []
        for cycle in cycles:
            starts.append(len(enumeration))
            enumeration += cycle

        self._enumeration[:] = enumeration
        self._starts[:] = starts

        logger.debug("Normalized decomposition of size %d with %d cycles", self.size, len(starts))
        return self

    def normalized(self):
        """ Obtain a normalized copy, leaving self untouched. """
        return self.copy().normalize()

    def is_normalized(self):
        return self == self.normalized()

    def cycle_type(self):
        """ Count the cycles by length, see CycleType. """
        return CycleType.from_decomposition(self)

    def acted_on_by(self, table):
        """
        Relabel every element c as table[c].

        The result is a decomposition of table * p * table.inverse(), where p is the permutation
        self denotes, with the same layout and hence the same cycle type.
        """
        if len(table) != self.size:
            raise ValueError("Acting on decomposition of mismatched size")
        return CycleDecomposition([table[c] for c in self._enumeration], self._starts, check = False)
