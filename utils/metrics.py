# utils/metrics.py
import numpy as np
from collections import Counter
from typing import Dict, List, Sequence


def compute_hhi(counts: Dict[str, int]) -> float:
    """Concentration of agents over paths: 1.0 = everyone on one path."""
    total = sum(counts.values())
    if total == 0:
        return 0.0
    shares_sq = [(v/total)**2 for v in counts.values()]
    return sum(shares_sq)


def compute_gini(values: List[float]) -> float:
    arr = np.array(values, dtype=float)
    if arr.size == 0 or np.all(arr == 0):
        return 0.0
    arr = np.sort(arr)
    n = arr.size
    cum = np.cumsum(arr)
    return float((n + 1 - 2 * np.sum(cum) / cum[-1]) / n)


def replay(agents, turns: Sequence[Sequence[tuple]], start: str, end: str) -> List[Dict[str, int]]:
    """
    Rebuild interior-room occupancy after every logged turn.
    Raises ValueError if an agent skips a room, moves twice in a turn,
    moves after arriving, or two agents share an interior room.
    """
    by_id = {a.id: a for a in agents}
    pos = {a.id: 0 for a in agents}   # path index; 0 = start room
    occupancy = []
    for t, moves in enumerate(turns, start=1):
        seen = set()
        for aid, room in moves:
            if aid in seen:
                raise ValueError(f"turn {t}: L{aid} moved twice")
            seen.add(aid)
            path = by_id[aid].path
            if pos[aid] >= len(path) - 1:
                raise ValueError(f"turn {t}: L{aid} moved after arriving")
            expected = path[pos[aid] + 1]
            if room != expected:
                raise ValueError(f"turn {t}: L{aid} entered {room}, expected {expected}")
            pos[aid] += 1
        counts = Counter(by_id[aid].path[i] for aid, i in pos.items())
        interior = {room: n for room, n in counts.items() if room not in (start, end)}
        crowded = {room: n for room, n in interior.items() if n > 1}
        if crowded:
            raise ValueError(f"turn {t}: rooms over capacity {crowded}")
        occupancy.append(interior)
    return occupancy


def arrival_turns(turns: Sequence[Sequence[tuple]], end: str) -> Dict[int, int]:
    arrived = {}
    for t, moves in enumerate(turns, start=1):
        for aid, room in moves:
            if room == end:
                arrived[aid] = t
    return arrived


def summarize(agents, turns: Sequence[Sequence[tuple]], start: str, end: str) -> Dict:
    moves_per_turn = [len(m) for m in turns]
    ants_per_path = Counter("-".join(a.path) for a in agents)
    traffic = Counter(room for m in turns for _, room in m if room != end)
    arrived = arrival_turns(turns, end)
    try:
        replay(agents, turns, start, end)
        violation = ""
    except ValueError as e:
        violation = str(e)
    return dict(
        turns=len(turns),
        total_moves=int(sum(moves_per_turn)),
        moves_per_turn=moves_per_turn,
        mean_moves_per_turn=float(np.mean(moves_per_turn)) if moves_per_turn else 0.0,
        ants=len(agents),
        arrived=len(arrived),
        ants_per_path=dict(ants_per_path),
        path_hhi=compute_hhi(ants_per_path),
        room_traffic=dict(traffic),
        traffic_gini=compute_gini(list(traffic.values())),
        valid=not violation,
        violation=violation,
    )
