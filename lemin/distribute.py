# lemin/distribute.py
"""
Agent distributor
- repeatedly picks the selected path with the lowest estimated completion time
- hands it a batch of agents; later agents in a batch get a startup delay
"""
from dataclasses import dataclass
from typing import List, Sequence
import logging
import math
import numpy as np

from lemin.model import Agent, Colony, Path
from lemin.params import Params

logger = logging.getLogger(__name__)


@dataclass
class PathState:
    path: Path
    efficiency: float
    assigned: int = 0

    @property
    def edges(self) -> int:
        return len(self.path) - 1


def path_efficiency(colony: Colony, path: Path, params: Params = None) -> float:
    p = params or Params()
    if len(path) <= 2:
        return 1.0
    mean_degree = float(np.mean([colony.degree(n) for n in path[1:-1]]))
    return (p.eff_length_weight * (1.0 / len(path))
            + p.eff_degree_weight * min(1.0, mean_degree / p.degree_saturation))


def estimate_time(state: PathState, unassigned: int, params: Params = None) -> float:
    p = params or Params()
    interference = state.assigned * p.interference * (1.0 - state.efficiency)
    headroom = max(0.0, 1.0 - state.assigned / state.edges)
    return state.edges + interference + (1.0 - headroom) * unassigned * p.backlog


def batch_size(state: PathState, est: float, unassigned: int) -> int:
    return min(math.floor(est / (state.edges * state.efficiency)), unassigned)


def startup_delay(state: PathState, batch_pos: int, params: Params = None) -> int:
    p = params or Params()
    if batch_pos == 0:
        return 0
    return min(int(batch_pos * (1.0 - state.efficiency) * p.delay_factor), state.edges - 1)


def make_states(colony: Colony, paths: Sequence[Path], params: Params = None) -> List[PathState]:
    return [PathState(path=tuple(path), efficiency=path_efficiency(colony, path, params))
            for path in paths]


def distribute_ants(colony: Colony, paths: Sequence[Path], params: Params = None) -> List[Agent]:
    """
    Agents with dense 1-based ids, in assignment order.
    Stops early (leaving ants unassigned) only if no path takes a batch.
    """
    states = make_states(colony, paths, params)
    agents: List[Agent] = []
    unassigned = colony.ant_count

    while unassigned > 0:
        best, best_time = None, math.inf
        for st in states:
            t = estimate_time(st, unassigned, params)
            if t < best_time:
                best, best_time = st, t
        if best is None:
            break
        n = batch_size(best, best_time, unassigned)
        if n <= 0:
            break

        for pos in range(n):
            agents.append(Agent(id=len(agents) + 1, path=best.path,
                                delay=startup_delay(best, pos, params)))
        best.assigned += n
        unassigned -= n
        logger.debug("batch of %d -> %s (est %.2f)", n, "-".join(best.path), best_time)

    if unassigned:
        logger.warning("%d ants left unassigned", unassigned)
    logger.info("Distributed %d ants over %d paths", len(agents), len(states))
    return agents
