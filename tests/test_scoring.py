import os
import unittest

from lemin.graph import load_colony, parse_colony
from lemin.params import Params
from lemin.paths import find_paths
from lemin.scoring import (PathScore, connectivity_score, independence_score,
                           length_score, position_score, score_paths,
                           select_paths, shared_interior, target_path_count)

MAPS = os.path.join(os.path.dirname(__file__), "..", "data", "maps")


def candidates(*paths):
    return [PathScore(path=tuple(p), index=i, length=0, independence=0,
                      connectivity=0, position=0) for i, p in enumerate(paths)]


# two 9-room paths sharing two interior rooms, plus shorter variants
P0 = ("s", "a1", "a2", "a3", "a4", "a5", "a6", "a7", "t")
P1 = ("s", "a1", "a2", "b3", "b4", "b5", "b6", "b7", "t")
P2 = ("s", "a1", "c2", "t")
P3 = ("s", "a1", "a2", "t")
Q1 = ("s", "q1", "q2", "q3", "q4", "q5", "q6", "q7", "t")
Q2 = ("s", "a1", "a2", "q1", "q2", "x", "y", "z", "t")
Q3 = ("s", "a1", "q1", "t")


class TestSubScores(unittest.TestCase):
    def setUp(self):
        self.colony = load_colony(os.path.join(MAPS, "twin.txt"))

    def test_twin_scores(self):
        scores = score_paths(self.colony, find_paths(self.colony))
        self.assertEqual([s.path for s in scores], [("s", "a", "e"), ("s", "b", "e")])
        top = scores[0]
        self.assertAlmostEqual(top.length, 100 / 3)
        self.assertAlmostEqual(top.independence, 100.0)
        self.assertAlmostEqual(top.connectivity, 40.0)
        self.assertAlmostEqual(top.position, 50.0)
        self.assertAlmostEqual(top.total, 0.4 * 100 / 3 + 30 + 8 + 5)

    def test_length_and_direct_connectivity(self):
        self.assertAlmostEqual(length_score(("s", "e")), 50.0)
        self.assertEqual(connectivity_score(self.colony, ("s", "e")), 100.0)

    def test_independence(self):
        paths = [("s", "a", "e"), ("s", "a", "b", "e"), ("s", "c", "e")]
        self.assertAlmostEqual(independence_score(0, paths), 50.0)
        self.assertAlmostEqual(independence_score(1, paths), 50.0)
        self.assertAlmostEqual(independence_score(2, paths), 100.0)
        self.assertAlmostEqual(independence_score(0, paths[:1]), 100.0)

    def test_position_degenerate_line(self):
        colony = parse_colony("1\n##start\ns 3 3\nm 9 -4\n##end\ne 3 3\ns-m\nm-e".splitlines())
        self.assertEqual(position_score(colony, ("s", "m", "e")), 100.0)

    def test_position_on_line(self):
        colony = parse_colony("1\n##start\ns 0 0\nm 2 2\n##end\ne 4 4\ns-m\nm-e".splitlines())
        self.assertAlmostEqual(position_score(colony, ("s", "m", "e")), 100.0)

    def test_shared_interior_ignores_endpoints(self):
        self.assertEqual(shared_interior(("s", "a", "e"), ("s", "b", "e")), 0)
        self.assertEqual(shared_interior(P0, P1), 2)

    def test_weights_from_params(self):
        p = Params(w_length=1.0, w_independence=0, w_connectivity=0, w_position=0)
        scores = score_paths(self.colony, find_paths(self.colony), p)
        self.assertAlmostEqual(scores[0].total, 100 / 3)

    def test_sorted_descending(self):
        colony = load_colony(os.path.join(MAPS, "example00.txt"))
        totals = [s.total for s in score_paths(colony, find_paths(colony))]
        self.assertEqual(totals, sorted(totals, reverse=True))


class TestSelection(unittest.TestCase):
    def test_target_count(self):
        self.assertEqual(target_path_count(1), 2)
        self.assertEqual(target_path_count(4), 3)
        self.assertEqual(target_path_count(10), 4)

    def test_bootstrap_exemption_and_target_stop(self):
        picked = select_paths(candidates(P0, P1, P2), ant_count=4)
        self.assertEqual([s.path for s in picked], [P0, P1, P2])
        picked = select_paths(candidates(P0, P1, P2), ant_count=1)
        self.assertEqual([s.path for s in picked], [P0, P1])

    def test_pairwise_budget_applies_during_bootstrap(self):
        picked = select_paths(candidates(P0, P3), ant_count=1)
        self.assertEqual([s.path for s in picked], [P0])

    def test_total_overlap_budget(self):
        picked = select_paths(candidates(P0, Q1, Q2), ant_count=4)
        self.assertEqual([s.path for s in picked], [P0, Q1])
        picked = select_paths(candidates(P0, Q1, Q2, Q3), ant_count=9)
        self.assertEqual([s.path for s in picked], [P0, Q1, Q3])

    def test_keeps_walking_until_two_accepted(self):
        picked = select_paths(candidates(P0, P3, P3, P3, Q1), ant_count=1)
        self.assertEqual([s.path for s in picked], [P0, Q1])

    def test_never_empty(self):
        picked = select_paths(candidates(("s", "e")), ant_count=100)
        self.assertEqual(len(picked), 1)
        self.assertEqual(select_paths([], ant_count=3), [])


if __name__ == '__main__':
    unittest.main()
