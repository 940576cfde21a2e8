from typing import Optional


class NodeArena:
    """Vertex nodes of one triangulation run, stored as parallel lists.

    A node is an integer handle into the lists below. Rings are circular
    doubly linked lists threaded through ``prev``/``next``; ``prev_z``/``next_z``
    hold the z-order links while a spatial index is active.
    """

    __slots__ = ["i", "x", "y", "prev", "next", "keys", "prev_z", "next_z", "steiner", "live", "_free"]
    i: list[int]
    x: list[float]
    y: list[float]
    prev: list[int]
    next: list[int]
    keys: list[Optional[int]]
    prev_z: list[Optional[int]]
    next_z: list[Optional[int]]
    steiner: list[bool]
    live: list[bool]

    def __init__(self):
        # vertex ordinal in the input buffer
        self.i = []

        # vertex coordinates
        self.x = []
        self.y = []

        # previous and next vertex nodes in a polygon ring
        self.prev = []
        self.next = []

        # z-order curve value, assigned by the spatial index
        self.keys = []

        # previous and next nodes in z-order
        self.prev_z = []
        self.next_z = []

        # indicates whether this is a steiner point
        self.steiner = []

        # false once a node has been spliced out of its ring
        self.live = []
        self._free = []

    def __len__(self):
        return len(self.i) - len(self._free)

    def _alloc(self, i: int, x: float, y: float) -> int:
        if self._free:
            p = self._free.pop()
            self.i[p] = i
            self.x[p] = x
            self.y[p] = y
            self.prev[p] = p
            self.next[p] = p
            self.keys[p] = None
            self.prev_z[p] = None
            self.next_z[p] = None
            self.steiner[p] = False
            self.live[p] = True
            return p

        p = len(self.i)
        self.i.append(i)
        self.x.append(x)
        self.y.append(y)
        self.prev.append(p)
        self.next.append(p)
        self.keys.append(None)
        self.prev_z.append(None)
        self.next_z.append(None)
        self.steiner.append(False)
        self.live.append(True)
        return p

    # create a node and optionally link it with previous one (in a circular doubly linked list)
    def insert_node(self, i: int, x: float, y: float, last: Optional[int]) -> int:
        p = self._alloc(i, x, y)

        if last is not None:
            nxt = self.next[last]
            self.next[p] = nxt
            self.prev[p] = last
            self.prev[nxt] = p
            self.next[last] = p

        return p

    def remove_node(self, p: int) -> None:
        if not self.live[p]:
            return

        nxt = self.next[p]
        prv = self.prev[p]
        self.prev[nxt] = prv
        self.next[prv] = nxt

        prev_z = self.prev_z[p]
        next_z = self.next_z[p]
        if prev_z is not None:
            self.next_z[prev_z] = next_z
        if next_z is not None:
            self.prev_z[next_z] = prev_z

        # the removed node keeps its own links so callers can still step off it
        self.live[p] = False
        self._free.append(p)

    # link two polygon vertices with a bridge; if the vertices belong to the same ring, it splits polygon into two
    # if one belongs to the outer ring and another to a hole, it merges it into a single ring
    def split_polygon(self, a: int, b: int) -> int:
        a2 = self._alloc(self.i[a], self.x[a], self.y[a])
        b2 = self._alloc(self.i[b], self.x[b], self.y[b])
        an = self.next[a]
        bp = self.prev[b]

        self.next[a] = b
        self.prev[b] = a

        self.next[a2] = an
        self.prev[an] = a2

        self.next[b2] = a2
        self.prev[a2] = b2

        self.next[bp] = b2
        self.prev[b2] = bp

        return b2

    # check if two points are equal
    def equals(self, p: int, q: int) -> bool:
        return self.x[p] == self.x[q] and self.y[p] == self.y[q]

    def ring(self, start: int) -> list[int]:
        """Return the nodes of the ring containing ``start``, in ring order."""
        nodes = [start]
        p = self.next[start]
        while p != start:
            nodes.append(p)
            p = self.next[p]
        return nodes
