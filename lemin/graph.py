# lemin/graph.py
"""
Colony map helpers:
- parse_colony: line grammar -> Colony (ant count, rooms, tunnels, ##start/##end)
- build_graph: rooms + tunnels -> networkx MultiGraph
- load_colony / node_link_dumps: file in, node-link JSON out
"""
from typing import Iterable, List, Optional
import json
import logging
import re
import networkx as nx

from lemin.errors import FormatError
from lemin.model import Colony, Room, Tunnel
from utils.io import read_lines

logger = logging.getLogger(__name__)

START_MARK = "##start"
END_MARK = "##end"
COMMENT_PREFIX = "#"
ANT_PREFIX = "L"

_INT = re.compile(r"^[+-]?\d+$", re.ASCII)
_COUNT = re.compile(r"^\d+$", re.ASCII)


def build_graph(rooms: Iterable[Room], tunnels: Iterable[Tunnel]) -> nx.MultiGraph:
    """Undirected multigraph; parallel tunnels are kept so degrees match the map."""
    G = nx.MultiGraph()
    for r in rooms:
        G.add_node(r.name, coord=r.coord, is_start=r.is_start, is_end=r.is_end)
    for t in tunnels:
        G.add_edge(t.a, t.b)
    return G


# ---------- line parsers ----------

def parse_ant_count(line: str) -> int:
    if not _COUNT.match(line):
        raise FormatError(f"bad ant count: {line!r}")
    count = int(line)
    if count <= 0:
        raise FormatError(f"ant count must be positive: {count}")
    return count


def parse_room(line: str, is_start: bool, is_end: bool) -> Room:
    parts = line.split()
    if len(parts) != 3:
        raise FormatError(f"room line needs 3 fields: {line!r}")
    name, x, y = parts
    if name.startswith(ANT_PREFIX) or name.startswith(COMMENT_PREFIX):
        raise FormatError(f"reserved room name: {name!r}")
    if not (_INT.match(x) and _INT.match(y)):
        raise FormatError(f"non-integer coordinates: {line!r}")
    return Room(name=name, x=int(x), y=int(y), is_start=is_start, is_end=is_end)


def parse_tunnel(line: str, rooms) -> Tunnel:
    parts = line.split("-")
    if len(parts) != 2:
        raise FormatError(f"tunnel line needs exactly one '-': {line!r}")
    a, b = parts
    for name in (a, b):
        if name not in rooms:
            raise FormatError(f"tunnel references unknown room: {name!r}")
    return Tunnel(a, b)


def _is_tunnel_line(line: str) -> bool:
    # rooms may carry negative coordinates, so a '-' alone does not make a tunnel
    return "-" in line and len(line.split()) == 1


def parse_colony(lines: List[str]) -> Colony:
    """
    Parse a map given as lines (without trailing newlines).
    Raises FormatError on any grammar violation.
    """
    if not lines:
        raise FormatError("empty input")

    ant_count = parse_ant_count(lines[0])
    rooms = {}
    tunnels = []
    start: Optional[str] = None
    end: Optional[str] = None
    expecting_start = expecting_end = False

    for lineno, line in enumerate(lines[1:], start=2):
        if line == "":
            continue
        if line == START_MARK:
            expecting_start = True
            continue
        if line == END_MARK:
            expecting_end = True
            continue
        if line.startswith(COMMENT_PREFIX):
            continue

        if _is_tunnel_line(line):
            tunnels.append(parse_tunnel(line, rooms))
            continue

        if expecting_start and expecting_end:
            raise FormatError(f"line {lineno}: room marked both start and end")
        room = parse_room(line, expecting_start, expecting_end)
        if room.name in rooms:
            raise FormatError(f"line {lineno}: duplicate room {room.name!r}")
        if room.is_start:
            if start is not None:
                raise FormatError(f"line {lineno}: second start room")
            start = room.name
        if room.is_end:
            if end is not None:
                raise FormatError(f"line {lineno}: second end room")
            end = room.name
        rooms[room.name] = room
        expecting_start = expecting_end = False

    if start is None:
        raise FormatError("no start room")
    if end is None:
        raise FormatError("no end room")

    colony = Colony(
        ant_count=ant_count,
        rooms=rooms,
        tunnels=tuple(tunnels),
        start=start,
        end=end,
        lines=tuple(lines),
        graph=build_graph(rooms.values(), tunnels),
    )
    logger.info("Parsed colony: %d ants, %d rooms, %d tunnels, %s -> %s",
                ant_count, len(rooms), len(tunnels), start, end)
    return colony


def load_colony(path: str) -> Colony:
    try:
        lines = read_lines(path)
    except (OSError, UnicodeDecodeError) as e:
        raise FormatError(f"cannot read {path}: {e}") from e
    return parse_colony(lines)


def node_link_dumps(colony: Colony) -> str:
    data = nx.readwrite.json_graph.node_link_data(colony.graph)
    data["graph"] = {"ants": colony.ant_count, "start": colony.start, "end": colony.end}
    return json.dumps(data, ensure_ascii=False, indent=2)


def node_link_dump(colony: Colony, path: str):
    with open(path, "w", encoding="utf-8") as f:
        f.write(node_link_dumps(colony))
