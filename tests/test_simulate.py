import os
import unittest

from lemin.errors import TopologyError
from lemin.graph import load_colony, parse_colony
from lemin.model import Agent
from lemin.simulate import agent_priority, format_turn, run_pipeline, simulate_moves
from utils.metrics import arrival_turns, replay

MAPS = os.path.join(os.path.dirname(__file__), "..", "data", "maps")

DIRECT = "3\n##start\nstart 0 0\n##end\nend 1 0\nstart-end"
LINE = "1\n##start\ns 0 0\nr1 1 0\nr2 2 0\n##end\ne 3 0\ns-r1\nr1-r2\nr2-e"
SPLIT = "2\n##start\ns 0 0\nm 5 5\n##end\ne 9 9\ns-m"
CROSS = "2\n##start\ns 0 0\nx 1 1\ny 1 -1\n##end\ne 2 0\ns-x\ns-y\nx-y\nx-e\ny-e"


def run(text):
    return run_pipeline(parse_colony(text.splitlines()))


class TestScenarios(unittest.TestCase):
    def test_direct_edge_single_turn(self):
        result = run(DIRECT)
        self.assertEqual(result.lines(), ["L1-end L2-end L3-end"])

    def test_two_parallel_paths(self):
        result = run_pipeline(load_colony(os.path.join(MAPS, "twin.txt")))
        self.assertEqual(result.lines(), [
            "L1-a L3-b",
            "L1-e L3-e L2-a L4-b",
            "L2-e L4-e",
        ])
        for moves in result.turns:
            interior = [room for _, room in moves if room not in ("s", "e")]
            self.assertEqual(len(interior), len(set(interior)))

    def test_disconnected(self):
        with self.assertRaises(TopologyError):
            run(SPLIT)

    def test_single_agent_line(self):
        result = run(LINE)
        self.assertEqual(result.lines(), ["L1-r1", "L1-r2", "L1-e"])


class TestInvariants(unittest.TestCase):
    def setUp(self):
        self.colony = load_colony(os.path.join(MAPS, "example00.txt"))
        self.result = run_pipeline(self.colony)

    def test_replay_respects_occupancy_and_order(self):
        replay(self.result.agents, self.result.turns, self.colony.start, self.colony.end)

    def test_every_agent_arrives_once(self):
        arrived = arrival_turns(self.result.turns, self.colony.end)
        self.assertEqual(sorted(arrived), list(range(1, self.colony.ant_count + 1)))
        self.assertTrue(all(a.finished for a in self.result.agents))

    def test_no_empty_turns(self):
        self.assertTrue(all(self.result.turns))

    def test_idempotent(self):
        again = run_pipeline(load_colony(os.path.join(MAPS, "example00.txt")))
        self.assertEqual(again.lines(), self.result.lines())

    def test_agents_use_selected_paths(self):
        selected = {s.path for s in self.result.selected}
        self.assertTrue(all(a.path in selected for a in self.result.agents))


class TestTurnMechanics(unittest.TestCase):
    def test_priority(self):
        a = Agent(id=1, path=("s", "x", "e"), delay=2)
        self.assertEqual(agent_priority(a, 0), 0.0)
        self.assertAlmostEqual(agent_priority(a, 2), 0.3)
        a.position = 0
        self.assertAlmostEqual(agent_priority(a, 0), 1 / 3 + 0.5)

    def test_delay_holds_agent_in_start(self):
        colony = parse_colony(LINE.splitlines())
        path = ("s", "r1", "r2", "e")
        agents = [Agent(1, path), Agent(2, path, delay=2)]
        turns = simulate_moves(colony, agents)
        self.assertEqual([format_turn(t) for t in turns],
                         ["L1-r1", "L1-r2", "L1-e L2-r1", "L2-r2", "L2-e"])

    def test_blocked_room_is_not_shared(self):
        # agent 2 stays in the start room until r1 is free
        colony = parse_colony(LINE.splitlines())
        path = ("s", "r1", "r2", "e")
        agents = [Agent(1, path), Agent(2, path)]
        turns = simulate_moves(colony, agents)
        replay(agents, turns, "s", "e")
        self.assertEqual([format_turn(t) for t in turns],
                         ["L1-r1", "L1-r2 L2-r1", "L1-e L2-r2", "L2-e"])

    def test_crossing_paths_strand_agents(self):
        # x and y are traversed in opposite order, so each agent holds the
        # room the other needs next
        colony = parse_colony(CROSS.splitlines())
        agents = [Agent(1, ("s", "x", "y", "e")), Agent(2, ("s", "y", "x", "e"))]
        turns = simulate_moves(colony, agents)
        self.assertEqual([format_turn(t) for t in turns], ["L1-x L2-y"])
        self.assertEqual([a.current_room() for a in agents], ["x", "y"])
        self.assertFalse(any(a.finished for a in agents))
        replay(agents, turns, "s", "e")
        self.assertEqual(arrival_turns(turns, "e"), {})

    def test_empty_agent_list_is_fatal(self):
        colony = parse_colony(LINE.splitlines())
        with self.assertRaises(TopologyError):
            simulate_moves(colony, [])


if __name__ == '__main__':
    unittest.main()
