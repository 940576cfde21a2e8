from typing import Optional

from .arena import NodeArena
from .diagnostics import signed_area
from .predicates import area


# create a circular doubly linked list from polygon points in the specified winding order
def linked_list(arena: NodeArena, data, start: int, end: int, dim: int, clockwise: bool) -> Optional[int]:
    last = None

    if clockwise == (signed_area(data, start, end, dim) > 0):
        for i in range(start, end, dim):
            last = arena.insert_node(i // dim, data[i], data[i + 1], last)
    else:
        for i in reversed(range(start, end, dim)):
            last = arena.insert_node(i // dim, data[i], data[i + 1], last)

    # a lone node stays, it becomes a steiner point when used as a hole
    if last is not None and arena.next[last] != last and arena.equals(last, arena.next[last]):
        nxt = arena.next[last]
        arena.remove_node(last)
        last = nxt

    return last


# eliminate colinear or duplicate points
def filter_points(arena: NodeArena, start: Optional[int], end: Optional[int] = None) -> Optional[int]:
    if start is None:
        return start

    if end is None:
        end = start

    nxt = arena.next
    prev = arena.prev
    p = start
    while True:
        again = False

        if not arena.steiner[p] and (arena.equals(p, nxt[p]) or area(arena, prev[p], p, nxt[p]) == 0):
            arena.remove_node(p)
            p = end = prev[p]
            if p == nxt[p]:
                break
            again = True

        else:
            p = nxt[p]

        if (not again) and p == end:
            break

    return end


# find the leftmost node of a polygon ring
def get_leftmost(arena: NodeArena, start: int) -> int:
    x = arena.x
    y = arena.y
    p = start
    leftmost = start

    while True:
        if x[p] < x[leftmost] or (x[p] == x[leftmost] and y[p] < y[leftmost]):
            leftmost = p

        p = arena.next[p]
        if p == start:
            break

    return leftmost
