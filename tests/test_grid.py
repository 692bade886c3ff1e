import unittest

from autoplacer.core.constants import Orientation
from autoplacer.core.exceptions import GridError
from autoplacer.core.models import BlockDescriptor
from autoplacer.engine.grid import GridIndex, PathBuilder, parse_block
from autoplacer.engine.occupancy import OccupiedSet, chebyshev
from autoplacer.engine.rng import SeededRng
from autoplacer.io.target import CellInfo


def numbered_cells(rows: int, cols: int, disabled=()):
    cells = []
    for r in range(rows):
        for c in range(cols):
            enabled = (r, c) not in disabled
            cells.append(CellInfo(enabled=enabled, number=r * cols + c + 1, position=(c * 10.0, r * 10.0)))
    return cells


class BlockParsingTests(unittest.TestCase):
    def test_parses_number_and_orientation(self) -> None:
        self.assertEqual(parse_block("4a"), BlockDescriptor(4, Orientation.ACROSS))
        self.assertEqual(parse_block(" 12 D "), BlockDescriptor(12, Orientation.DOWN))

    def test_rejects_malformed(self) -> None:
        for text in ("", "a4", "4x", "4", "four a", None):
            self.assertIsNone(parse_block(text), text)

    def test_str_round_trip(self) -> None:
        self.assertEqual(str(parse_block("7 d")), "7d")


class GridIndexTests(unittest.TestCase):
    def test_cell_count_mismatch_raises(self) -> None:
        with self.assertRaises(GridError):
            GridIndex(2, 2, numbered_cells(1, 3))

    def test_rc_from_index_is_row_major(self) -> None:
        grid = GridIndex(3, 4, numbered_cells(3, 4))
        self.assertEqual(grid.rc_from_index(0), (0, 0))
        self.assertEqual(grid.rc_from_index(5), (1, 1))
        self.assertEqual(grid.rc_from_index(11), (2, 3))
        self.assertIsNone(grid.rc_from_index(12))
        self.assertIsNone(grid.cell_at(3, 0))

    def test_find_by_number_first_match_wins(self) -> None:
        cells = [
            CellInfo(number=7),
            CellInfo(number=3),
            CellInfo(number=7),
            CellInfo(number=0),
        ]
        grid = GridIndex(2, 2, cells)
        self.assertEqual(grid.find_by_number(7).rc, (0, 0))
        self.assertEqual(grid.find_by_number(3).rc, (0, 1))
        self.assertIsNone(grid.find_by_number(99))

    def test_unlabeled_number_never_matches(self) -> None:
        grid = GridIndex(2, 2, [CellInfo(number=0)] * 4)
        self.assertIsNone(grid.find_by_number(0))
        self.assertIsNone(grid.find_by_number(-1))

    def test_enabled_cells_skips_disabled_and_excluded(self) -> None:
        grid = GridIndex(2, 2, numbered_cells(2, 2, disabled={(0, 1)}))
        pool = grid.enabled_cells(excluding={(1, 0)})
        self.assertEqual([cell.rc for cell in pool], [(0, 0), (1, 1)])


class PathBuilderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = GridIndex(5, 5, numbered_cells(5, 5, disabled={(2, 2)}))
        self.paths = PathBuilder(self.grid)

    def test_across_path(self) -> None:
        path = self.paths.build_path(BlockDescriptor(1, Orientation.ACROSS), 3)
        self.assertEqual([cell.rc for cell in path], [(0, 0), (0, 1), (0, 2)])
        self.assertEqual([cell.number for cell in path], [1, 2, 3])

    def test_down_path_keeps_disabled_cells(self) -> None:
        path = self.paths.build_path(BlockDescriptor(3, Orientation.DOWN), 4)
        self.assertEqual([cell.rc for cell in path], [(0, 2), (1, 2), (2, 2), (3, 2)])
        self.assertFalse(path[2].enabled)

    def test_truncates_at_edge(self) -> None:
        path = self.paths.build_path(BlockDescriptor(4, Orientation.ACROSS), 5)
        self.assertEqual([cell.rc for cell in path], [(0, 3), (0, 4)])

    def test_missing_start_yields_empty_path(self) -> None:
        self.assertEqual(self.paths.build_path(BlockDescriptor(42, Orientation.ACROSS), 3), [])


class SeededRngTests(unittest.TestCase):
    def test_first_value_for_seed_zero(self) -> None:
        self.assertEqual(SeededRng(0).next_float(), 1013904223 / 2 ** 32)

    def test_same_seed_same_sequence(self) -> None:
        a = SeededRng(12345)
        b = SeededRng(12345)
        self.assertEqual([a() for _ in range(20)], [b() for _ in range(20)])

    def test_values_in_unit_interval(self) -> None:
        rng = SeededRng(2 ** 40 + 7)
        for _ in range(200):
            value = rng.next_float()
            self.assertGreaterEqual(value, 0.0)
            self.assertLess(value, 1.0)

    def test_row_stride(self) -> None:
        self.assertEqual(SeededRng.for_row(100, 2).state, 100 + 2 * 131)


class OccupiedSetTests(unittest.TestCase):
    def test_reserve_and_release_return_new_sets(self) -> None:
        empty = OccupiedSet()
        taken = empty.reserve([(1, 1), (2, 3)])
        self.assertEqual(len(empty), 0)
        self.assertIn((1, 1), taken)
        released = taken.release([(1, 1)])
        self.assertNotIn((1, 1), released)
        self.assertIn((1, 1), taken)

    def test_is_clear_uses_chebyshev_distance(self) -> None:
        taken = OccupiedSet([(2, 2)])
        self.assertEqual(chebyshev((0, 0), (2, 1)), 2)
        self.assertFalse(taken.is_clear((3, 3), 1))
        self.assertTrue(taken.is_clear((4, 4), 1))
        self.assertTrue(taken.is_clear((3, 3), 0))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
