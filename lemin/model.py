# lemin/model.py
"""
Colony data model
- Room / Tunnel: parsed map records
- Colony: read-only graph + metadata (ant count, start/end, raw lines)
- Agent: one ant, its assigned path and movement cursor
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Tuple

import networkx as nx

Path = Tuple[str, ...]


@dataclass(frozen=True)
class Room:
    name: str
    x: int
    y: int
    is_start: bool = False
    is_end: bool = False

    @property
    def coord(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Tunnel:
    a: str
    b: str

    def other(self, name: str) -> Optional[str]:
        if self.a == name:
            return self.b
        if self.b == name:
            return self.a
        return None


@dataclass(frozen=True)
class Colony:
    ant_count: int
    rooms: Mapping[str, Room]
    tunnels: Tuple[Tunnel, ...]
    start: str
    end: str
    lines: Tuple[str, ...] = ()
    graph: nx.MultiGraph = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "rooms", MappingProxyType(dict(self.rooms)))
        object.__setattr__(self, "tunnels", tuple(self.tunnels))
        object.__setattr__(self, "lines", tuple(self.lines))
        if self.graph is None:
            from lemin.graph import build_graph
            object.__setattr__(self, "graph", build_graph(self.rooms.values(), self.tunnels))
        # self-loops count once, like any other tunnel touching the room
        degrees = {
            n: self.graph.degree(n) - self.graph.number_of_edges(n, n)
            for n in self.graph.nodes
        }
        object.__setattr__(self, "_degrees", degrees)

    def room(self, name: str) -> Room:
        return self.rooms[name]

    def iter_tunnels(self) -> Iterator[Tunnel]:
        return iter(self.tunnels)

    def neighbors(self, name: str) -> List[str]:
        """Distinct adjacent rooms, in first-declared-tunnel order."""
        return [n for n in self.graph.neighbors(name) if n != name]

    def degree(self, name: str) -> int:
        """Number of tunnels touching the room (parallel tunnels counted)."""
        return self._degrees[name]

    def coord(self, name: str) -> Tuple[int, int]:
        return self.rooms[name].coord

    def is_terminal(self, name: str) -> bool:
        return name == self.start or name == self.end


@dataclass
class Agent:
    id: int
    path: Path
    delay: int = 0
    position: Optional[int] = None  # None = still waiting in the start room

    @property
    def departed(self) -> bool:
        return self.position is not None

    @property
    def finished(self) -> bool:
        return self.position == len(self.path) - 1

    def ready(self, turn: int) -> bool:
        return self.departed or self.delay <= turn

    def next_room(self) -> str:
        if self.position is None:
            return self.path[0]
        return self.path[self.position + 1]

    def current_room(self) -> Optional[str]:
        if self.position is None:
            return None
        return self.path[self.position]

    def advance(self) -> str:
        room = self.next_room()
        self.position = 0 if self.position is None else self.position + 1
        return room
