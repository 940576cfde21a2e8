from typing import Optional

from .arena import NodeArena

# coordinates are scaled into this range before bit interleaving
Z_ORDER_SCALE = 32767


# z-order of a point given coords and inverse of the longer side of data bbox
def z_order(x: float, y: float, min_x: float, min_y: float, inv_size: float) -> int:
    # coords are transformed into non-negative 15-bit integer range
    x = int((x - min_x) * inv_size)
    y = int((y - min_y) * inv_size)

    x = (x | (x << 8)) & 0x00FF00FF
    x = (x | (x << 4)) & 0x0F0F0F0F
    x = (x | (x << 2)) & 0x33333333
    x = (x | (x << 1)) & 0x55555555

    y = (y | (y << 8)) & 0x00FF00FF
    y = (y | (y << 4)) & 0x0F0F0F0F
    y = (y | (y << 2)) & 0x33333333
    y = (y | (y << 1)) & 0x55555555

    return x | (y << 1)


def bounding_box(data, end: int, dim: int) -> tuple[float, float, float]:
    """Return ``(min_x, min_y, inv_size)`` for the vertices in ``data[:end]``.

    ``inv_size`` maps the longer side of the box onto ``Z_ORDER_SCALE``; it is 0
    for a degenerate box, which disables the index.
    """
    min_x = max_x = data[0]
    min_y = max_y = data[1]

    for i in range(dim, end, dim):
        x = data[i]
        y = data[i + 1]
        if x < min_x:
            min_x = x
        if y < min_y:
            min_y = y
        if x > max_x:
            max_x = x
        if y > max_y:
            max_y = y

    inv_size = max(max_x - min_x, max_y - min_y)
    inv_size = Z_ORDER_SCALE / inv_size if inv_size != 0 else 0
    return min_x, min_y, inv_size


# interlink polygon nodes in z-order
def index_curve(arena: NodeArena, start: int, min_x: float, min_y: float, inv_size: float) -> int:
    keys = arena.keys
    prev_z = arena.prev_z
    next_z = arena.next_z
    p = start
    while True:
        if keys[p] is None:
            keys[p] = z_order(arena.x[p], arena.y[p], min_x, min_y, inv_size)
        prev_z[p] = arena.prev[p]
        next_z[p] = arena.next[p]
        p = arena.next[p]
        if p == start:
            break

    next_z[prev_z[p]] = None
    prev_z[p] = None

    return sort_linked(arena, p)


# Simon Tatham's linked list merge sort algorithm
# http://www.chiark.greenend.org.uk/~sgtatham/algorithms/listsort.html
def sort_linked(arena: NodeArena, _list: Optional[int]) -> Optional[int]:
    keys = arena.keys
    prev_z = arena.prev_z
    next_z = arena.next_z
    in_size = 1

    while True:
        p = _list
        _list = None
        tail = None
        num_merges = 0

        while p is not None:
            num_merges += 1
            q = p
            p_size = 0
            for _ in range(in_size):
                p_size += 1
                q = next_z[q]
                if q is None:
                    break
            q_size = in_size

            while p_size > 0 or (q_size > 0 and q is not None):
                if p_size != 0 and (q_size == 0 or q is None or keys[p] <= keys[q]):
                    e = p
                    p = next_z[p]
                    p_size -= 1
                else:
                    e = q
                    q = next_z[q]
                    q_size -= 1

                if tail is not None:
                    next_z[tail] = e
                else:
                    _list = e

                prev_z[e] = tail
                tail = e

            p = q

        next_z[tail] = None
        in_size *= 2

        if num_merges <= 1:
            break

    return _list
