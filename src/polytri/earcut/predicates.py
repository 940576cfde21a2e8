"""Orientation, containment and visibility tests on arena nodes.

All tests share the sign convention of ``area``: a negative value means
``p -> q -> r`` turns clockwise in screen coordinates (y pointing down),
which is the convex turn for rings built with ``clockwise=True``.
"""

from .arena import NodeArena


# signed area of a triangle
def area(arena: NodeArena, p: int, q: int, r: int) -> float:
    x = arena.x
    y = arena.y
    return (y[q] - y[p]) * (x[r] - x[q]) - (x[q] - x[p]) * (y[r] - y[q])


# check if a point lies within a convex triangle
def point_in_triangle(ax, ay, bx, by, cx, cy, px, py) -> bool:
    pax = ax - px
    pay = ay - py
    pbx = bx - px
    pby = by - py
    pcx = cx - px
    pcy = cy - py
    return (
        pcx * pay - pax * pcy >= 0
        and pax * pby - pbx * pay >= 0
        and pbx * pcy - pcx * pby >= 0
    )


def sign(num: float) -> int:
    if num > 0:
        return 1
    if num < 0:
        return -1
    return 0


# for collinear points p, q, r, check if point q lies on segment pr
def on_segment(arena: NodeArena, p: int, q: int, r: int) -> bool:
    x = arena.x
    y = arena.y
    return (
        x[q] <= max(x[p], x[r])
        and x[q] >= min(x[p], x[r])
        and y[q] <= max(y[p], y[r])
        and y[q] >= min(y[p], y[r])
    )


# check if two segments intersect
def intersects(arena: NodeArena, p1: int, q1: int, p2: int, q2: int) -> bool:
    o1 = sign(area(arena, p1, q1, p2))
    o2 = sign(area(arena, p1, q1, q2))
    o3 = sign(area(arena, p2, q2, p1))
    o4 = sign(area(arena, p2, q2, q1))

    if o1 != o2 and o3 != o4:
        return True  # general case

    if o1 == 0 and on_segment(arena, p1, p2, q1):
        return True  # p1, q1 and p2 are collinear and p2 lies on p1q1
    if o2 == 0 and on_segment(arena, p1, q2, q1):
        return True  # p1, q1 and q2 are collinear and q2 lies on p1q1
    if o3 == 0 and on_segment(arena, p2, p1, q2):
        return True  # p2, q2 and p1 are collinear and p1 lies on p2q2
    if o4 == 0 and on_segment(arena, p2, q1, q2):
        return True  # p2, q2 and q1 are collinear and q1 lies on p2q2

    return False


# check if a polygon diagonal intersects any polygon segments
def intersects_polygon(arena: NodeArena, a: int, b: int) -> bool:
    i = arena.i
    nxt = arena.next
    ai = i[a]
    bi = i[b]
    p = a
    while True:
        pn = nxt[p]
        pi = i[p]
        pni = i[pn]
        if pi != ai and pni != ai and pi != bi and pni != bi and intersects(arena, p, pn, a, b):
            return True
        p = pn
        if p == a:
            break

    return False


# check if a polygon diagonal is locally inside the polygon
def locally_inside(arena: NodeArena, a: int, b: int) -> bool:
    aprev = arena.prev[a]
    anext = arena.next[a]
    if area(arena, aprev, a, anext) < 0:
        return area(arena, a, b, anext) >= 0 and area(arena, a, aprev, b) >= 0
    else:
        return area(arena, a, b, aprev) < 0 or area(arena, a, anext, b) < 0


# check if the middle point of a polygon diagonal is inside the polygon
def middle_inside(arena: NodeArena, a: int, b: int) -> bool:
    x = arena.x
    y = arena.y
    nxt = arena.next
    inside = False
    px = (x[a] + x[b]) / 2
    py = (y[a] + y[b]) / 2
    p = a
    while True:
        pn = nxt[p]
        p_x = x[p]
        p_y = y[p]
        pn_y = y[pn]
        if (p_y > py) != (pn_y > py) and pn_y != p_y and px < (x[pn] - p_x) * (py - p_y) / (pn_y - p_y) + p_x:
            inside = not inside
        p = pn
        if p == a:
            break

    return inside


# whether sector in vertex m contains sector in vertex p in the same coordinates
def sector_contains_sector(arena: NodeArena, m: int, p: int) -> bool:
    return area(arena, arena.prev[m], m, arena.prev[p]) < 0 and area(arena, arena.next[p], m, arena.next[m]) < 0


# check if a diagonal between two polygon nodes is valid (lies in polygon interior)
def is_valid_diagonal(arena: NodeArena, a: int, b: int) -> bool:
    i = arena.i
    prev = arena.prev
    nxt = arena.next
    if i[nxt[a]] == i[b] or i[prev[a]] == i[b]:
        return False
    if intersects_polygon(arena, a, b):
        return False  # crosses another edge

    if (
        locally_inside(arena, a, b)
        and locally_inside(arena, b, a)
        and middle_inside(arena, a, b)
        # does not create opposite-facing sectors
        and (area(arena, prev[a], a, prev[b]) != 0 or area(arena, a, prev[b], b) != 0)
    ):
        return True

    # special zero-length case
    return (
        arena.equals(a, b)
        and area(arena, prev[a], a, nxt[a]) > 0
        and area(arena, prev[b], b, nxt[b]) > 0
    )
