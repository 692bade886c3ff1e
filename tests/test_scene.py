import json
import tempfile
import unittest
from pathlib import Path

from autoplacer.core.constants import NUM_ROWS
from autoplacer.core.exceptions import SceneFormatError
from autoplacer.core.models import PlacementJob, RowInput
from autoplacer.engine.runner import PlacementRunner
from autoplacer.io.scene import SceneTarget, build_scene, job_from_dict, load_job


class BuildSceneTests(unittest.TestCase):
    def test_sequential_numbering_skips_disabled(self) -> None:
        scene = build_scene(2, 3, disabled={(0, 1)})
        numbers = [scene.read_cell(i).number for i in range(6)]
        self.assertEqual(numbers, [1, 0, 2, 3, 4, 5])
        self.assertFalse(scene.read_cell(1).enabled)
        self.assertEqual(scene.grid_shape(), (2, 3))
        self.assertEqual(scene.grid_size(), (300.0, 200.0))

    def test_explicit_numbers(self) -> None:
        scene = build_scene(2, 2, numbers={(1, 1): 9})
        self.assertEqual([scene.read_cell(i).number for i in range(4)], [0, 0, 0, 9])

    def test_positions_are_cell_centres(self) -> None:
        scene = build_scene(2, 2, cell_size=10)
        self.assertEqual(scene.read_cell(3).position, (15.0, 15.0))

    def test_fresh_scene_has_six_empty_rows(self) -> None:
        scene = build_scene(1, 1)
        self.assertEqual(len(scene.scene_rows), NUM_ROWS)
        self.assertEqual(scene.read_qa_text(6), ("", ""))
        self.assertEqual(scene.read_frenzy_slot(6, 5).label, "")

    def test_out_of_range_rows_and_slots_raise(self) -> None:
        scene = build_scene(1, 1)
        with self.assertRaises(SceneFormatError):
            scene.read_qa_text(7)
        with self.assertRaises(SceneFormatError):
            scene.read_frenzy_slot(1, 6)


class SceneDocumentTests(unittest.TestCase):
    def test_file_round_trip_after_run(self) -> None:
        scene = build_scene(5, 5)
        PlacementRunner(scene).run(PlacementJob(rows=[RowInput(block="1a", answer="CAT")]))
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "scene.json"
            scene.to_file(path)
            loaded = SceneTarget.from_file(path)
        self.assertEqual(loaded.to_dict(), scene.to_dict())
        self.assertEqual(loaded.read_answer(1).letter_refs[:3], [1, 2, 3])

    def test_minimal_document_is_padded(self) -> None:
        doc = {
            "grid": {
                "rows": 1,
                "cols": 2,
                "cells": [{"number": 1, "position": [0, 0]}, {"enabled": False}],
            },
            "rows": [{"answer": "HI", "letters": [1], "frenzy": [{"label": "X1"}]}],
        }
        scene = SceneTarget.from_dict(doc)
        self.assertIsNone(scene.read_parent_translation())
        self.assertEqual(scene.read_answer(1).letter_refs, [1, 0, 0, 0, 0, 0, 0, 0, 0])
        self.assertEqual(scene.read_frenzy_slot(1, 1).label, "X1")
        self.assertEqual(scene.read_frenzy_slot(1, 5).label, "")
        self.assertEqual(len(scene.scene_rows), NUM_ROWS)

    def test_incomplete_grid_raises(self) -> None:
        with self.assertRaises(SceneFormatError):
            SceneTarget.from_dict({"grid": {"rows": 2}})

    def test_bad_point_raises(self) -> None:
        doc = {"grid": {"rows": 1, "cols": 1, "cells": [{"position": "nowhere"}]}}
        with self.assertRaises(SceneFormatError):
            SceneTarget.from_dict(doc)

    def test_non_object_cell_raises(self) -> None:
        doc = {"grid": {"rows": 1, "cols": 1, "cells": [5]}}
        with self.assertRaises(SceneFormatError):
            SceneTarget.from_dict(doc)

    def test_non_numeric_cell_number_raises(self) -> None:
        doc = {"grid": {"rows": 1, "cols": 1, "cells": [{"number": "abc"}]}}
        with self.assertRaises(SceneFormatError):
            SceneTarget.from_dict(doc)

    def test_malformed_rows_raise(self) -> None:
        grid = {"rows": 1, "cols": 1, "cells": [{"number": 1}]}
        for rows in (
            ["oops"],
            [{"letters": ["x"]}],
            [{"letters": 7}],
            [{"orientation": "sideways"}],
            [{"frenzy": ["K1"]}],
            {"answer": "CAT"},
        ):
            with self.subTest(rows=rows):
                with self.assertRaises(SceneFormatError):
                    SceneTarget.from_dict({"grid": grid, "rows": rows})

    def test_non_object_document_raises(self) -> None:
        with self.assertRaises(SceneFormatError):
            SceneTarget.from_dict([])
        with self.assertRaises(SceneFormatError):
            SceneTarget.from_dict({"grid": [1, 1]})

    def test_unreadable_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertRaises(SceneFormatError):
                SceneTarget.from_file(path)


class JobDocumentTests(unittest.TestCase):
    def test_config_is_clamped_and_rows_padded(self) -> None:
        job = job_from_dict(
            {
                "config": {"min_gap": 150, "seed": "abc", "auto_frenzy": True},
                "rows": [{"block": "1a", "answer": "cat", "af": 2, "match": 1}],
            }
        )
        self.assertEqual(job.config.min_gap, 99)
        self.assertEqual(job.config.seed, 12345)
        self.assertTrue(job.config.auto_frenzy)
        self.assertEqual(len(job.rows), NUM_ROWS)
        self.assertEqual(job.rows[0].af_count, 2)
        self.assertEqual(job.rows[5], RowInput())

    def test_float_form_values_are_accepted(self) -> None:
        job = job_from_dict({"config": {"min_gap": 2.0, "seed": "77 "}, "rows": [{"match": 1.0}]})
        self.assertEqual(job.config.min_gap, 2)
        self.assertEqual(job.config.seed, 77)
        self.assertEqual(job.rows[0].match_count, 1.0)

    def test_load_job_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "job.json"
            path.write_text(json.dumps({"rows": [{"frenzy": "abc"}]}), encoding="utf-8")
            job = load_job(path)
        self.assertEqual(job.rows[0].frenzy, "abc")
        self.assertFalse(job.config.auto_frenzy)

    def test_invalid_job_documents(self) -> None:
        with self.assertRaises(SceneFormatError):
            job_from_dict({"rows": ["1a"]})
        with self.assertRaises(SceneFormatError):
            job_from_dict({"config": [1, 2]})
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "job.json"
            path.write_text("[]", encoding="utf-8")
            with self.assertRaises(SceneFormatError):
                load_job(path)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
