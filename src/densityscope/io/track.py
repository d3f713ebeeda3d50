"""
Coordinate track loading.

A track is a recorded stream of 2-D input coordinates, one per
reading. Two formats are accepted:

  - text: one reading per line, either a bare ``x y`` pair (whitespace
    or comma separated) or a recorded sensor sample
    ``id N time T x X y Y z Z``, of which only x and y are kept.
    Blank lines, ``#`` comments and ``$`` message boundaries are skipped.
  - JSON: a list of ``[x, y]`` pairs or ``{"x": ..., "y": ...}`` objects,
    optionally wrapped as ``{"points": [...]}``.
"""

import json
import re
from pathlib import Path
from typing import Any, List, Tuple, Union

Point = Tuple[float, float]

_SPLIT = re.compile(r"[,\s]+")
_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_SAMPLE = re.compile(
    rf"^id (\d+) time (\d+) x ({_NUMBER}) y ({_NUMBER}) z ({_NUMBER})$"
)


def parse_track_text(text: str) -> List[Point]:
    """
    Parse the text track format.

    Raises:
        ValueError: If a line is neither an ``x y`` pair nor a sensor sample.
    """
    points = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line or line == "$":
            continue
        sample = _SAMPLE.match(line)
        if sample:
            points.append((float(sample.group(3)), float(sample.group(4))))
            continue
        fields = [f for f in _SPLIT.split(line) if f]
        if len(fields) != 2:
            raise ValueError(
                f"line {lineno}: expected 'x y', got {raw.strip()!r}"
            )
        try:
            points.append((float(fields[0]), float(fields[1])))
        except ValueError:
            raise ValueError(
                f"line {lineno}: non-numeric coordinate in {raw.strip()!r}"
            ) from None
    return points


def _coerce_point(item: Any, index: int) -> Point:
    if isinstance(item, dict):
        if "x" not in item or "y" not in item:
            raise ValueError(f"point {index}: missing 'x' or 'y' key")
        x, y = item["x"], item["y"]
    elif isinstance(item, (list, tuple)) and len(item) == 2:
        x, y = item
    else:
        raise ValueError(f"point {index}: expected [x, y] or {{x, y}}, got {item!r}")
    try:
        return float(x), float(y)
    except (TypeError, ValueError):
        raise ValueError(
            f"point {index}: non-numeric coordinate in {item!r}"
        ) from None


def parse_track_json(data: Any) -> List[Point]:
    """Parse an already-decoded JSON track."""
    if isinstance(data, dict):
        data = data.get("points")
    if not isinstance(data, list):
        raise ValueError("JSON track must be a list of points or {'points': [...]}")
    return [_coerce_point(item, i) for i, item in enumerate(data)]


def load_track(path: Union[str, Path]) -> List[Point]:
    """
    Load a coordinate track from disk.

    Args:
        path: ``.json`` file, or any other extension for the text format.

    Returns:
        List of (x, y) float tuples in file order.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Track file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"invalid JSON track: {e}") from None
            return parse_track_json(data)
        return parse_track_text(f.read())
