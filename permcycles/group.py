import logging
from abc import abstractmethod
from math import factorial
import collections.abc

from .permutation import PermutationTable

logger = logging.getLogger(__name__)

class Group(collections.abc.Iterator):
    """
    Class for iterating over the elements of a permutation group.

    Group itself is an abstract class, and its subclasses implement specific groups.
    A Group is an iterator that returns a PermutationTable after each iteration,
    starting with the identity.
    After raising StopIteration it is back in the state it started in,
    so the group can be iterated over any number of times.
    """

    def __iter__(self):
        return self

    @abstractmethod
    def __next__(self):
        pass

    def __contains__(self, elem):
        return elem in set(self)

    def __len__(self):
        return sum(1 for _ in self)

    def conjugacy_classes(self):
        """
        Partition the elements by cycle type.

        Returns a dict from CycleType to the list of elements with that cycle type,
        in iteration order. For the symmetric group these are exactly the conjugacy classes.
        """
        classes = {}
        for perm in self:
            classes.setdefault(perm.cycle_type(), []).append(perm)

        logger.debug("Found %d cycle types in %s", len(classes), self)
        return classes

class CyclicGroup(Group):
    """
    The cyclic group.

    Iterates over the powers of the canonical n-cycle, i -> (i+1) % n.
    """

    def __init__(self, n):
        self._size = n
        self._step = 0

    def __len__(self):
        return max(self._size, 1)

    def __next__(self):
        if self._step < len(self):
            perm = PermutationTable.cyclic(self._size, self._step)
            self._step += 1
            return perm
        else:
            self._step = 0
            raise StopIteration

    def __str__(self):
        return f'Cyclic group Z_{self._size}'

class SymmetricGroup(Group):
    """
    The symmetric group.

    Iterates over all permutations of n elements in lexicographic order of their tables.
    """

    def __init__(self, n):
        self._size = n
        self._perm = list(range(n))
        self._done = False

    def __len__(self):
        return factorial(self._size)

    def __contains__(self, elem):
        return len(elem) == self._size

    def _swap(self, i, j):
        self._perm[i], self._perm[j] = self._perm[j], self._perm[i]

    def __next__(self):
        # Narayana Pandita's algorithm
        if self._done:
            self._done = False
            self._perm = list(range(self._size))
            raise StopIteration

        result = PermutationTable(self._perm, check = False)

        for i in reversed(range(self._size-1)):
            if self._perm[i] < self._perm[i+1]:
                k = i
                break
        else:
            self._done = True
            return result

        for i in reversed(range(k+1, self._size)):
            if self._perm[k] < self._perm[i]:
                l = i
                break

        self._swap(k, l)
        self._perm[k+1:] = reversed(self._perm[k+1:])

        return result

    def __str__(self):
        return f'Symmetric group S_{self._size}'
