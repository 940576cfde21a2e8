import logging
from enum import IntEnum
from typing import Optional

import numpy as np

from .arena import NodeArena
from .holes import eliminate_holes
from .predicates import area, intersects, is_valid_diagonal, locally_inside, point_in_triangle
from .ring import filter_points, linked_list
from .zorder import bounding_box, index_curve, z_order

logger = logging.getLogger(__name__)

# above this many vertices the ear test walks the z-order curve instead of the whole ring
HASH_THRESHOLD = 80

# upper bound on ring work items processed by one call
MAX_WORK_ITEMS = 1_000_000


class Pass(IntEnum):
    BASIC = 0
    CURE = 1
    SPLIT = 2


def earcut(data, hole_indices=None, dim: int = 2) -> list[int]:
    """Triangulate a polygon given as a flat coordinate buffer.

    ``data`` holds ``dim`` numbers per vertex, of which only the first two are
    used. ``hole_indices`` lists the vertex ordinals where hole rings start.
    Returns vertex ordinals, three per triangle.
    """
    # plain floats index much faster than numpy scalars
    data = np.asarray(data, dtype=np.float64).ravel().tolist()
    if hole_indices is not None:
        hole_indices = [int(h) for h in hole_indices]
    dim = int(dim)

    has_holes = hole_indices is not None and len(hole_indices) > 0
    outer_len = hole_indices[0] * dim if has_holes else len(data)
    arena = NodeArena()
    outer_node = linked_list(arena, data, 0, outer_len, dim, True)
    triangles = []

    if outer_node is None or arena.next[outer_node] == arena.prev[outer_node]:
        return triangles

    if has_holes:
        outer_node = eliminate_holes(arena, data, hole_indices, outer_node, dim)

    bbox = None

    # if the shape is not too simple, we'll use z-order curve hash later; calculate polygon bbox
    if len(data) > HASH_THRESHOLD * dim:
        bbox = bounding_box(data, outer_len, dim)
        if not bbox[2]:
            bbox = None

    earcut_linked(arena, outer_node, triangles, bbox)

    return triangles


# main ear slicing loop which triangulates a polygon (given as a linked list)
def earcut_linked(arena: NodeArena, ear: int, triangles: list[int], bbox=None) -> None:
    """Run the escalating passes over the ring at ``ear``.

    ``bbox`` is ``(min_x, min_y, inv_size)`` when the z-order index is in use.
    Each work item is a ring together with the pass to run on it; splitting a
    ring pushes both halves back as fresh ``Pass.BASIC`` items.
    """
    stack = [(ear, Pass.BASIC)]
    processed = 0

    while stack:
        processed += 1
        if processed > MAX_WORK_ITEMS:
            logger.warning(f"Giving up after {MAX_WORK_ITEMS} ring passes, {len(stack)} rings left untriangulated")
            return

        ear, _pass = stack.pop()
        if ear is None:
            continue

        if _pass == Pass.BASIC:
            # interlink polygon nodes in z-order
            if bbox is not None:
                index_curve(arena, ear, *bbox)
            ear = clip_ears(arena, ear, triangles, bbox)
            if ear is not None:
                logger.debug(f"No ear found in ring at vertex {arena.i[ear]}, curing local intersections")
                stack.append((filter_points(arena, ear), Pass.CURE))

        elif _pass == Pass.CURE:
            if arena.next[ear] == arena.prev[ear]:
                continue
            # the cure pass changes the ring's shape, so the z-order index is not consulted again
            ear = cure_local_intersections(arena, ear, triangles)
            ear = clip_ears(arena, ear, triangles, None)
            if ear is not None:
                logger.debug(f"No ear found in ring at vertex {arena.i[ear]}, splitting")
                stack.append((ear, Pass.SPLIT))

        else:
            halves = split_earcut(arena, ear)
            if halves is None:
                logger.debug(f"No valid diagonal in ring at vertex {arena.i[ear]}")
                continue
            a, c = halves
            stack.append((c, Pass.BASIC))
            stack.append((a, Pass.BASIC))


def clip_ears(arena: NodeArena, ear: int, triangles: list[int], bbox=None) -> Optional[int]:
    """Cut ears off the ring until it is exhausted or a full lap finds none.

    Returns ``None`` once the ring is fully triangulated, otherwise the node
    where the unsuccessful lap ended.
    """
    stop = ear
    prev = arena.prev
    nxt = arena.next
    i = arena.i

    # iterate through ears, slicing them one by one
    while prev[ear] != nxt[ear]:
        p = prev[ear]
        n = nxt[ear]

        if is_ear_hashed(arena, ear, *bbox) if bbox is not None else is_ear(arena, ear):
            # cut off the triangle
            triangles.append(i[p])
            triangles.append(i[ear])
            triangles.append(i[n])

            arena.remove_node(ear)

            ear = n
            stop = n

            continue

        ear = n

        # if we looped through the whole remaining polygon and can't find any more ears
        if ear == stop:
            return ear

    return None


def _triangle_bbox(ax, ay, bx, by, cx, cy):
    # triangle bbox; min & max are calculated like this for speed
    x0 = (ax if ax < cx else cx) if ax < bx else (bx if bx < cx else cx)
    y0 = (ay if ay < cy else cy) if ay < by else (by if by < cy else cy)
    x1 = (ax if ax > cx else cx) if ax > bx else (bx if bx > cx else cx)
    y1 = (ay if ay > cy else cy) if ay > by else (by if by > cy else cy)
    return x0, y0, x1, y1


# check whether a polygon node forms a valid ear with adjacent nodes
def is_ear(arena: NodeArena, ear: int) -> bool:
    xs = arena.x
    ys = arena.y
    prev = arena.prev
    nxt = arena.next
    a = prev[ear]
    b = ear
    c = nxt[ear]

    if area(arena, a, b, c) >= 0:
        return False  # reflex, can't be an ear

    # now make sure we don't have other points inside the potential ear
    ax = xs[a]
    ay = ys[a]
    bx = xs[b]
    by = ys[b]
    cx = xs[c]
    cy = ys[c]

    x0, y0, x1, y1 = _triangle_bbox(ax, ay, bx, by, cx, cy)

    p = nxt[c]
    while p != a:
        px = xs[p]
        py = ys[p]
        if (
            px >= x0
            and px <= x1
            and py >= y0
            and py <= y1
            and point_in_triangle(ax, ay, bx, by, cx, cy, px, py)
            and area(arena, prev[p], p, nxt[p]) >= 0
        ):
            return False
        p = nxt[p]

    return True


def is_ear_hashed(arena: NodeArena, ear: int, min_x: float, min_y: float, inv_size: float) -> bool:
    xs = arena.x
    ys = arena.y
    keys = arena.keys
    prev = arena.prev
    nxt = arena.next
    prev_z = arena.prev_z
    next_z = arena.next_z
    a = prev[ear]
    b = ear
    c = nxt[ear]

    if area(arena, a, b, c) >= 0:
        return False  # reflex, can't be an ear

    ax = xs[a]
    ay = ys[a]
    bx = xs[b]
    by = ys[b]
    cx = xs[c]
    cy = ys[c]

    x0, y0, x1, y1 = _triangle_bbox(ax, ay, bx, by, cx, cy)

    # z-order range for the current triangle bbox
    min_z = z_order(x0, y0, min_x, min_y, inv_size)
    max_z = z_order(x1, y1, min_x, min_y, inv_size)

    p = prev_z[ear]
    n = next_z[ear]

    # look for points inside the triangle in both directions
    while p is not None and keys[p] >= min_z and n is not None and keys[n] <= max_z:
        px = xs[p]
        py = ys[p]
        if (
            px >= x0
            and px <= x1
            and py >= y0
            and py <= y1
            and p != a
            and p != c
            and point_in_triangle(ax, ay, bx, by, cx, cy, px, py)
            and area(arena, prev[p], p, nxt[p]) >= 0
        ):
            return False
        p = prev_z[p]

        nx = xs[n]
        ny = ys[n]
        if (
            nx >= x0
            and nx <= x1
            and ny >= y0
            and ny <= y1
            and n != a
            and n != c
            and point_in_triangle(ax, ay, bx, by, cx, cy, nx, ny)
            and area(arena, prev[n], n, nxt[n]) >= 0
        ):
            return False
        n = next_z[n]

    # look for remaining points in decreasing z-order
    while p is not None and keys[p] >= min_z:
        if (
            p != a
            and p != c
            and point_in_triangle(ax, ay, bx, by, cx, cy, xs[p], ys[p])
            and area(arena, prev[p], p, nxt[p]) >= 0
        ):
            return False
        p = prev_z[p]

    # look for remaining points in increasing z-order
    while n is not None and keys[n] <= max_z:
        if (
            n != a
            and n != c
            and point_in_triangle(ax, ay, bx, by, cx, cy, xs[n], ys[n])
            and area(arena, prev[n], n, nxt[n]) >= 0
        ):
            return False
        n = next_z[n]

    return True


# go through all polygon nodes and cure small local self-intersections
def cure_local_intersections(arena: NodeArena, start: int, triangles: list[int]) -> int:
    prev = arena.prev
    nxt = arena.next
    i = arena.i
    p = start
    while True:
        a = prev[p]
        b = nxt[nxt[p]]

        if (
            not arena.equals(a, b)
            and area(arena, a, p, b) < 0
            and intersects(arena, a, p, nxt[p], b)
            and locally_inside(arena, a, b)
            and locally_inside(arena, b, a)
        ):
            triangles.append(i[a])
            triangles.append(i[p])
            triangles.append(i[b])

            # remove two nodes involved
            arena.remove_node(p)
            arena.remove_node(nxt[p])

            p = start = b

        p = nxt[p]
        if p == start:
            break

    return filter_points(arena, p)


# try splitting polygon into two and triangulate them independently
def split_earcut(arena: NodeArena, start: int) -> Optional[tuple[int, int]]:
    """Split the ring at ``start`` along its first valid diagonal.

    Returns the two resulting rings, or ``None`` when no diagonal is valid.
    """
    nxt = arena.next
    prev = arena.prev
    # look for a valid diagonal that divides the polygon into two
    a = start
    while True:
        b = nxt[nxt[a]]
        while b != prev[a]:
            if arena.i[a] != arena.i[b] and is_valid_diagonal(arena, a, b):
                # split the polygon in two by the diagonal
                c = arena.split_polygon(a, b)

                # filter colinear points around the cuts
                a = filter_points(arena, a, nxt[a])
                c = filter_points(arena, c, nxt[c])
                return a, c
            b = nxt[b]
        a = nxt[a]
        if a == start:
            break

    return None
