import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from polytri.earcut import deviation, earcut, flatten, validate_hole_indices
from polytri.errors import InvalidPolygon, PolytriError


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="polytri", description="Triangulate polygons read from JSON files")
    parser.add_argument(
        "--target",
        required=True,
        type=Path,
        nargs="+",
        help="JSON files holding a list of rings or a GeoJSON Polygon",
    )
    parser.add_argument("--output", type=Path, help="write the triangles here instead of stdout")
    parser.add_argument(
        "--max-deviation",
        type=float,
        default=None,
        help="warn about triangulations whose area deviates more than this fraction",
    )
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def load_rings(file_path: Path) -> list:
    """Read a polygon as a list of rings, the outer ring first and its holes after it.

    The file holds either a bare list of rings or a GeoJSON ``Polygon``,
    optionally wrapped in a ``Feature``.
    """
    with open(file_path, encoding="utf-8") as f:
        try:
            doc = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidPolygon(f"not a JSON document: {e}") from e

    if isinstance(doc, dict):
        if doc.get("type") == "Feature":
            doc = doc.get("geometry") or {}
        if doc.get("type") != "Polygon":
            raise InvalidPolygon(f"unsupported geometry type {doc.get('type')!r}")
        doc = doc.get("coordinates")

    if not isinstance(doc, list) or not doc:
        raise InvalidPolygon("expected a non-empty list of rings")
    for ring in doc:
        if not isinstance(ring, list) or not ring:
            raise InvalidPolygon("every ring needs at least one point")

    dim = len(doc[0][0]) if isinstance(doc[0][0], list) else 0
    if dim < 2 or any(not isinstance(point, list) or len(point) != dim for ring in doc for point in ring):
        raise InvalidPolygon("points must be lists of at least 2 coordinates, all of the same length")
    return doc


def triangulate_file(file_path: Path, max_deviation: Optional[float] = None) -> list[int]:
    polygon = flatten(load_rings(file_path))
    vertices = polygon["vertices"]
    holes = polygon["holes"]
    dim = polygon["dimensions"]
    validate_hole_indices(holes, len(vertices) // dim)

    triangles = earcut(vertices, holes, dim)

    if max_deviation is not None:
        err = deviation(vertices, holes, dim, triangles)
        if err > max_deviation:
            logging.warning(f"Triangulation of {file_path} deviates by {err:.3g} from the polygon area")

    return triangles


def main(argv=None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s - %(levelname)s - %(message)s")

    results = {}
    for file_path in args.target:
        logging.info(f"Processing start: {file_path}")
        try:
            triangles = triangulate_file(file_path, args.max_deviation)
        except PolytriError as e:
            logging.error(f"Skipping {file_path}: {e}")
            continue
        logging.info(f"{len(triangles) // 3} triangles from {file_path}")

        results[str(file_path)] = triangles
        logging.info(f"Processing end: {file_path}")

    text = json.dumps(results)
    if args.output is None:
        print(text)
    else:
        logging.info(f"Export: {args.output}")
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text, encoding="utf-8")


if __name__ == "__main__":
    main()
