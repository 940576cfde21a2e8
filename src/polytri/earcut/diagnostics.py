import math


def signed_area(data, start: int, end: int, dim: int) -> float:
    total = 0
    j = end - dim
    for i in range(start, end, dim):
        total += (data[j] - data[i]) * (data[i + 1] + data[j + 1])
        j = i

    return total


# return a percentage difference between the polygon area and its triangulation area
# used to verify correctness of triangulation
def deviation(data, hole_indices, dim: int, triangles) -> float:
    has_holes = hole_indices is not None and len(hole_indices) > 0
    outer_len = hole_indices[0] * dim if has_holes else len(data)

    polygon_area = abs(signed_area(data, 0, outer_len, dim))
    if has_holes:
        _len = len(hole_indices)
        for i in range(_len):
            start = hole_indices[i] * dim
            end = hole_indices[i + 1] * dim if i < _len - 1 else len(data)
            polygon_area -= abs(signed_area(data, start, end, dim))

    triangles_area = 0
    for i in range(0, len(triangles), 3):
        a = triangles[i] * dim
        b = triangles[i + 1] * dim
        c = triangles[i + 2] * dim
        triangles_area += abs(
            (data[a] - data[c]) * (data[b + 1] - data[a + 1])
            - (data[a] - data[b]) * (data[c + 1] - data[a + 1])
        )

    if polygon_area == 0:
        return 0 if triangles_area == 0 else math.inf
    return abs((triangles_area - polygon_area) / polygon_area)


# turn a polygon in a multi-dimensional array form (e.g. as in GeoJSON) into a form earcut accepts
def flatten(data) -> dict:
    dim = len(data[0][0])
    vertices = []
    holes = []
    hole_index = 0

    for i in range(len(data)):
        for j in range(len(data[i])):
            for d in range(dim):
                vertices.append(data[i][j][d])

        if i > 0:
            hole_index += len(data[i - 1])
            holes.append(hole_index)

    return {"vertices": vertices, "holes": holes, "dimensions": dim}
