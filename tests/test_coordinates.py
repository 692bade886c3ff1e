import unittest

from autoplacer.core.constants import GRID_PARENT_BASELINE, Orientation
from autoplacer.core.models import Cell
from autoplacer.engine.coordinates import (
    CoordinateMapper,
    ReferenceFrame,
    collapsed_end,
    frenzy_starts,
    segment,
)


class ReferenceFrameTests(unittest.TestCase):
    def test_delta_against_baseline(self) -> None:
        frame = ReferenceFrame((455.5, 772.5))
        dx, dy = frame.delta
        self.assertAlmostEqual(dx, 10.0)
        self.assertAlmostEqual(dy, -10.0)

    def test_missing_parent_has_no_translation(self) -> None:
        frame = ReferenceFrame(None)
        self.assertEqual(frame.translation, (0.0, 0.0))
        self.assertEqual(frame.delta, (0.0, 0.0))


class CoordinateMapperTests(unittest.TestCase):
    def setUp(self) -> None:
        self.cell = Cell(0, 0, number=1, position=(100.0, 200.0))

    def assertPointAlmostEqual(self, actual, expected) -> None:
        self.assertAlmostEqual(actual[0], expected[0], places=6)
        self.assertAlmostEqual(actual[1], expected[1], places=6)

    def test_answer_anchor_adds_parent_translation(self) -> None:
        mapper = CoordinateMapper(ReferenceFrame(GRID_PARENT_BASELINE), (1000, 1000), (1000, 1000))
        self.assertPointAlmostEqual(mapper.answer_anchor(self.cell), (545.5, 982.5))

    def test_frenzy_end_at_baseline(self) -> None:
        mapper = CoordinateMapper(ReferenceFrame(GRID_PARENT_BASELINE), (1000, 1000), (1000, 1000))
        self.assertPointAlmostEqual(mapper.frenzy_end(self.cell), (991.2, 1764.4))

    def test_frenzy_end_applies_only_the_drift(self) -> None:
        mapper = CoordinateMapper(ReferenceFrame((455.5, 772.5)), (1000, 1000), (1000, 1000))
        self.assertPointAlmostEqual(mapper.frenzy_end(self.cell), (1011.2, 1744.4))

    def test_frenzy_end_is_scaled_to_target(self) -> None:
        mapper = CoordinateMapper(ReferenceFrame(None), (500, 500), (1000, 2000))
        self.assertEqual(mapper.scale, (2.0, 4.0))
        self.assertPointAlmostEqual(mapper.frenzy_end(self.cell), (545.7 * 2, 981.9 * 4))


class FrenzyGeometryTests(unittest.TestCase):
    def test_starts_step_along_across(self) -> None:
        starts = frenzy_starts((10.0, 20.0), Orientation.ACROSS)
        self.assertEqual(len(starts), 5)
        self.assertEqual(starts[0], (50.0, 50.0))
        self.assertEqual(starts[4], (250.0, 50.0))

    def test_starts_step_along_down(self) -> None:
        starts = frenzy_starts((10.0, 20.0), Orientation.DOWN, count=3)
        self.assertEqual(starts, [(50.0, 50.0), (50.0, 100.0), (50.0, 150.0)])

    def test_degenerate_segment_is_nudged(self) -> None:
        start, end = segment((5.0, 5.0), (5.0, 5.0))
        self.assertEqual(start, (5.0, 5.0))
        self.assertEqual(end, collapsed_end((5.0, 5.0)))
        self.assertGreater(end[0], start[0])

    def test_regular_segment_untouched(self) -> None:
        self.assertEqual(segment((0.0, 0.0), (3.0, 4.0)), ((0.0, 0.0), (3.0, 4.0)))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
