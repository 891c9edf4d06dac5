# lemin/scoring.py
"""
Path scorer & selector
- four sub-scores per path (length, independence, connectivity, position), ~0-100
- composite = weighted sum, sorted descending (enumeration order breaks ties)
- greedy low-overlap selection of the paths used concurrently
"""
from dataclasses import dataclass
from typing import List, Sequence
import logging
import math
import numpy as np

from lemin.model import Colony, Path
from lemin.params import Params

logger = logging.getLogger(__name__)


@dataclass
class PathScore:
    path: Path
    index: int              # position in enumeration order
    length: float
    independence: float
    connectivity: float
    position: float
    total: float = 0.0

    @property
    def interior(self) -> Path:
        return self.path[1:-1]


def shared_interior(a: Path, b: Path) -> int:
    """Rooms two paths share, start and end excluded."""
    return len(set(a[1:-1]) & set(b[1:-1]))


# ---------- sub-scores ----------

def length_score(path: Path) -> float:
    return 100.0 / len(path)


def independence_score(i: int, paths: Sequence[Path]) -> float:
    shared = sum(shared_interior(paths[i], q) for j, q in enumerate(paths) if j != i)
    return 100.0 / (1 + shared)


def connectivity_score(colony: Colony, path: Path, scale: float = 20.0) -> float:
    if len(path) == 2:
        return 100.0
    degrees = [colony.degree(n) for n in path[1:-1]]
    return float(np.mean(degrees)) * scale


def position_score(colony: Colony, path: Path) -> float:
    """100 / (1 + mean perpendicular distance of interior rooms to the start-end line)."""
    s = np.array(colony.coord(colony.start), dtype=float)
    e = np.array(colony.coord(colony.end), dtype=float)
    line = e - s
    norm = np.hypot(line[0], line[1])
    interior = path[1:-1]
    if norm == 0 or not interior:
        return 100.0
    pts = np.array([colony.coord(n) for n in interior], dtype=float) - s
    dev = np.abs(line[0] * pts[:, 1] - line[1] * pts[:, 0]) / norm
    return 100.0 / (1.0 + float(dev.mean()))


def score_paths(colony: Colony, paths: Sequence[Path], params: Params = None) -> List[PathScore]:
    """Score every path, best first."""
    p = params or Params()
    scores = []
    for i, path in enumerate(paths):
        sc = PathScore(
            path=tuple(path),
            index=i,
            length=length_score(path),
            independence=independence_score(i, paths),
            connectivity=connectivity_score(colony, path, p.connectivity_scale),
            position=position_score(colony, path),
        )
        sc.total = (p.w_length * sc.length + p.w_independence * sc.independence
                    + p.w_connectivity * sc.connectivity + p.w_position * sc.position)
        logger.debug("path %d %s total=%.3f (len=%.1f ind=%.1f conn=%.1f pos=%.1f)",
                     i, "-".join(path), sc.total, sc.length, sc.independence,
                     sc.connectivity, sc.position)
        scores.append(sc)
    # stable sort keeps enumeration order among equal totals
    return sorted(scores, key=lambda s: -s.total)


# ---------- selection ----------

def target_path_count(ant_count: int) -> int:
    return math.isqrt(ant_count) + 1


def select_paths(scored: Sequence[PathScore], ant_count: int, params: Params = None) -> List[PathScore]:
    """
    Greedy pass over the sorted candidates.
    - stop once `target` candidates were examined and >= 2 accepted
    - reject if overlap with any accepted path > (len_c + len_a) // overlap_divisor
    - accept if total overlap <= number accepted, or fewer than 2 accepted so far
    Result keeps acceptance order.
    """
    p = params or Params()
    target = target_path_count(ant_count)
    accepted: List[PathScore] = []

    for examined, cand in enumerate(scored):
        if examined >= target and len(accepted) >= 2:
            break
        overlaps = [shared_interior(cand.path, a.path) for a in accepted]
        too_close = any(
            o > (len(cand.path) + len(a.path)) // p.overlap_divisor
            for o, a in zip(overlaps, accepted)
        )
        if too_close:
            continue
        if len(accepted) < 2 or sum(overlaps) <= len(accepted):
            accepted.append(cand)

    if not accepted and scored:
        accepted.append(scored[0])

    logger.info("Selected %d of %d paths (target %d)", len(accepted), len(scored), target)
    return accepted
