import logging
import math
from typing import Optional

from .arena import NodeArena
from .predicates import locally_inside, point_in_triangle, sector_contains_sector
from .ring import filter_points, get_leftmost, linked_list

logger = logging.getLogger(__name__)


# link every hole into the outer loop, producing a single-ring polygon without holes
def eliminate_holes(arena: NodeArena, data, hole_indices, outer_node: int, dim: int) -> int:
    queue = []
    _len = len(hole_indices)

    for i in range(_len):
        start = hole_indices[i] * dim
        end = hole_indices[i + 1] * dim if i < _len - 1 else len(data)
        lst = linked_list(arena, data, start, end, dim, False)
        if lst is None:
            logger.debug(f"Empty hole ring at vertex {hole_indices[i]}")
            continue
        if lst == arena.next[lst]:
            arena.steiner[lst] = True
        queue.append(get_leftmost(arena, lst))

    queue.sort(key=lambda q: arena.x[q])

    # process holes from left to right
    for hole in queue:
        outer_node = eliminate_hole(arena, hole, outer_node)

    return outer_node


# find a bridge between vertices that connects hole with an outer ring and and link it
def eliminate_hole(arena: NodeArena, hole: int, outer_node: int) -> int:
    bridge = find_hole_bridge(arena, hole, outer_node)
    if bridge is None:
        logger.debug(f"No bridge found for hole at vertex {arena.i[hole]}")
        return outer_node

    bridge_reverse = arena.split_polygon(bridge, hole)

    start = filter_points(arena, bridge_reverse, arena.next[bridge_reverse])
    if not arena.live[bridge]:
        # already filtered away along with the rest of the ring
        return start
    return filter_points(arena, bridge, arena.next[bridge])


# David Eberly's algorithm for finding a bridge between hole and outer polygon
def find_hole_bridge(arena: NodeArena, hole: int, outer_node: int) -> Optional[int]:
    xs = arena.x
    ys = arena.y
    nxt = arena.next
    p = outer_node
    hx = xs[hole]
    hy = ys[hole]
    qx = -math.inf
    m = None

    # find a segment intersected by a ray from the hole's leftmost point to the left
    # segment's endpoint with lesser x will be potential connection point
    while True:
        px = xs[p]
        py = ys[p]
        pn = nxt[p]
        if hy <= py and hy >= ys[pn] and ys[pn] != py:
            x = px + (hy - py) * (xs[pn] - px) / (ys[pn] - py)
            if x <= hx and x > qx:
                qx = x
                m = p if px < xs[pn] else pn
                if x == hx:
                    # hole touches outer segment; pick leftmost endpoint
                    return m
        p = pn
        if p == outer_node:
            break

    if m is None:
        return None

    # look for points inside the triangle of hole point, segment intersection and endpoint
    # if there are no points found, we have a valid connection
    # otherwise choose the point of the minimum angle with the ray as connection point

    stop = m
    mx = xs[m]
    my = ys[m]
    tan_min = math.inf

    p = m

    while True:
        px = xs[p]
        py = ys[p]
        if (
            hx >= px
            and px >= mx
            and hx != px
            and point_in_triangle(
                hx if hy < my else qx,
                hy,
                mx,
                my,
                qx if hy < my else hx,
                hy,
                px,
                py,
            )
        ):
            tan = abs(hy - py) / (hx - px)  # tangential

            if locally_inside(arena, p, hole) and (
                tan < tan_min
                or (tan == tan_min and (px > xs[m] or (px == xs[m] and sector_contains_sector(arena, m, p))))
            ):
                m = p
                tan_min = tan

        p = nxt[p]
        if p == stop:
            break

    return m
