# lemin/simulate.py
"""
Turn simulator + pipeline + CLI
- pipeline: parse -> enumerate -> score/select -> distribute -> simulate
- each turn agents move in priority order; an interior room holds one agent
- the start and end rooms are unbounded; entering the start room is not logged
- stops on the first turn in which nobody moves
"""
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple
import argparse
import json
import logging
import os
import sys

import pandas as pd

from lemin.distribute import distribute_ants
from lemin.errors import FormatError, TopologyError
from lemin.graph import load_colony, node_link_dump
from lemin.model import Agent, Colony, Path
from lemin.params import Params, load_params
from lemin.paths import find_paths
from lemin.scoring import PathScore, score_paths, select_paths
from utils.io import ensure_dir
from utils.logger import setup_logging
from utils.metrics import summarize

logger = logging.getLogger(__name__)

Move = Tuple[int, str]   # (agent id, room entered)


@dataclass
class SimulationResult:
    colony: Colony
    paths: List[Path]
    scores: List[PathScore]
    selected: List[PathScore]
    agents: List[Agent]
    turns: List[List[Move]] = field(default_factory=list)

    def lines(self) -> List[str]:
        return [format_turn(moves) for moves in self.turns]


def format_turn(moves: Sequence[Move]) -> str:
    return " ".join(f"L{aid}-{room}" for aid, room in moves)


# ---------- simulator ----------

def agent_priority(agent: Agent, turn: int, params: Params = None) -> float:
    p = params or Params()
    index = -1 if agent.position is None else agent.position
    priority = (index + 1) / len(agent.path)
    if agent.departed:
        priority += p.departed_bonus
    elif agent.delay <= turn:
        priority += p.ready_bonus
    return priority


def run_turn(colony: Colony, agents: Sequence[Agent], turn: int, params: Params = None) -> Tuple[bool, List[Move]]:
    """Advance every eligible agent once. Returns (anyone moved, logged moves)."""
    moving = [a for a in agents if not a.finished]
    moving.sort(key=lambda a: (-agent_priority(a, turn, params), a.id))

    # rooms held at turn start; entries and exits update it as the turn runs
    occupied = {a.current_room() for a in moving
                if a.departed and not colony.is_terminal(a.current_room())}
    moved = False
    log: List[Move] = []

    for a in moving:
        if not a.ready(turn):
            continue
        nxt = a.next_room()
        if not colony.is_terminal(nxt) and nxt in occupied:
            continue
        here = a.current_room()
        a.advance()
        moved = True
        occupied.discard(here)
        if not colony.is_terminal(nxt):
            occupied.add(nxt)
        if nxt != colony.start:
            log.append((a.id, nxt))

    return moved, log


def simulate_moves(colony: Colony, agents: Sequence[Agent], params: Params = None) -> List[List[Move]]:
    if not agents:
        raise TopologyError("nothing to simulate: no agents on any path")

    turns: List[List[Move]] = []
    turn = 0
    while True:
        moved, log = run_turn(colony, agents, turn, params)
        if not moved:
            break
        if log:
            turns.append(log)
        turn += 1

    stuck = [a.id for a in agents if not a.finished]
    if stuck:
        logger.warning("%d agents never reached %s: %s", len(stuck), colony.end, stuck)
    logger.info("Simulated %d turns (%d logged)", turn, len(turns))
    return turns


def run_pipeline(colony: Colony, params: Params = None) -> SimulationResult:
    params = params or Params()
    paths = find_paths(colony)
    if not paths:
        raise TopologyError(f"{colony.start} and {colony.end} are not connected")

    scores = score_paths(colony, paths, params)
    selected = select_paths(scores, colony.ant_count, params)
    if not selected:
        raise TopologyError("no path selected")
    agents = distribute_ants(colony, [s.path for s in selected], params)
    turns = simulate_moves(colony, agents, params)
    return SimulationResult(colony=colony, paths=paths, scores=scores,
                            selected=selected, agents=agents, turns=turns)


# ---------- reports ----------

def paths_frame(result: SimulationResult) -> pd.DataFrame:
    chosen = {s.index: i for i, s in enumerate(result.selected)}
    load = {}
    for a in result.agents:
        load[a.path] = load.get(a.path, 0) + 1
    rows = []
    for s in result.scores:
        rows.append({
            "path_index": s.index,
            "path": "-".join(s.path),
            "rooms": len(s.path),
            "length": s.length,
            "independence": s.independence,
            "connectivity": s.connectivity,
            "position": s.position,
            "total": s.total,
            "selected": s.index in chosen,
            "selection_rank": chosen.get(s.index, -1),
            "agents": load.get(s.path, 0),
        })
    return pd.DataFrame(rows)


def agents_frame(result: SimulationResult) -> pd.DataFrame:
    rank = {s.path: i for i, s in enumerate(result.selected)}
    return pd.DataFrame({
        "agent": [a.id for a in result.agents],
        "selection_rank": [rank[a.path] for a in result.agents],
        "path": ["-".join(a.path) for a in result.agents],
        "delay": [a.delay for a in result.agents],
        "arrived": [a.finished for a in result.agents],
    })


def save_results(result: SimulationResult, out: str, plot: bool = False):
    ensure_dir(out)
    paths_frame(result).to_csv(os.path.join(out, "paths.csv"), index=False)
    agents_frame(result).to_csv(os.path.join(out, "agents.csv"), index=False)
    summary = summarize(result.agents, result.turns, result.colony.start, result.colony.end)
    with open(os.path.join(out, "summary.json"), "w", encoding="utf-8") as f:
        json.dump(summary, f, ensure_ascii=False, indent=2)
    if plot:
        from utils.plotting import bar_dict, line_dict
        bar_dict(summary["ants_per_path"], "Agents per path", "path", "agents",
                 out=os.path.join(out, "agents_per_path.png"))
        line_dict({i + 1: n for i, n in enumerate(summary["moves_per_turn"])},
                  "Moves per turn", "turn", "moves",
                  out=os.path.join(out, "moves_per_turn.png"))
    logger.info("[SAVE] results -> %s", out)


# ---------- CLI ----------

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog="lemin", description="Route an ant colony from ##start to ##end.")
    ap.add_argument("map", help="colony map file")
    ap.add_argument("--params", default="", help="JSON file overriding heuristic constants")
    ap.add_argument("--out", default="", help="directory for paths.csv / agents.csv / summary.json")
    ap.add_argument("--plot", action="store_true", help="also write PNG figures to --out")
    ap.add_argument("--dump-graph", default="", help="write the colony as node-link JSON")
    ap.add_argument("--log-file", default="")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO if args.log_file else logging.WARNING
    setup_logging(args.log_file, level)

    params = Params()
    if args.params:
        try:
            params = load_params(args.params)
        except (OSError, ValueError) as e:
            ap.error(str(e))

    try:
        colony = load_colony(args.map)
        result = run_pipeline(colony, params)
    except (FormatError, TopologyError) as e:
        logger.error("%s: %s", type(e).__name__, e.detail)
        print(e)
        return 1

    for line in colony.lines:
        print(line)
    print()
    for line in result.lines():
        print(line)

    if args.dump_graph:
        node_link_dump(colony, args.dump_graph)
    if args.out:
        save_results(result, args.out, plot=args.plot)
    return 0


if __name__ == "__main__":
    sys.exit(main())
