from math import factorial, gcd
from functools import reduce

class CycleType:
    """
    The cycle type of a permutation of range(N), as counts of cycles by length.

    counts[k] is the number of cycles of length k+1, so sum((k+1) * counts[k]) == N.
    Two permutations of the same size are conjugate exactly when their cycle types are equal,
    which makes CycleType a convenient key for conjugacy classes.
    """

    def __init__(self, counts):
        self._counts = tuple(int(c) for c in counts)

        if any(c < 0 for c in self._counts):
            raise ValueError(f"Negative cycle count in {self._counts}")
        total = sum((k+1) * c for k, c in enumerate(self._counts))
        if total != len(self._counts):
            raise ValueError(f"Cycle counts {self._counts} cover {total} elements, not {len(self._counts)}")

    @staticmethod
    def from_decomposition(decomposition):
        counts = [0] * decomposition.size
        for cycle in decomposition:
            counts[len(cycle) - 1] += 1
        return CycleType(counts)

    @staticmethod
    def from_lengths(size, lengths):
        """ Build the cycle type from a list of cycle lengths, which must add up to size. """
        counts = [0] * size
        for length in lengths:
            if not 0 < length <= size:
                raise ValueError(f"Cycle length {length} impossible in size {size}")
            counts[length - 1] += 1
        return CycleType(counts)

    @property
    def counts(self):
        return self._counts

    @property
    def size(self):
        return len(self._counts)

    def __getitem__(self, k):
        return self._counts[k]

    def __len__(self):
        return len(self._counts)

    def __iter__(self):
        return iter(self._counts)

    def __eq__(self, other):
        if not isinstance(other, CycleType):
            return NotImplemented
        return self._counts == other._counts

    def __hash__(self):
        return hash(self._counts)

    def __repr__(self):
        return f"CycleType({list(self._counts)})"

    def lengths(self):
        """ The sorted list of cycle lengths, i.e. the partition of N the cycle type stands for. """
        return [k+1 for k, c in enumerate(self._counts) for _ in range(c)]

    def cycle_count(self):
        return sum(self._counts)

    def order(self):
        """ The order of any permutation with this cycle type: the lcm of its cycle lengths. """
        return reduce(lambda a,b: (a*b)//gcd(a,b), self.lengths(), 1)

    def parity(self):
        """
        The parity of any permutation with this cycle type: 1 if odd, 0 if even.

        A cycle of length k is a product of k-1 transpositions, so in total
        N minus the number of cycles transpositions are needed.
        """
        return (self.size - self.cycle_count()) % 2

    def class_size(self):
        """ The number of permutations of range(N) with this cycle type. """
        denom = 1
        for k, c in enumerate(self._counts):
            denom *= (k+1)**c * factorial(c)
        return factorial(self.size) // denom
