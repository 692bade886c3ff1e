"""CLI entrypoint for the frenzy letter auto placer."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from autoplacer.core.constants import DEFAULT_MIN_GAP, DEFAULT_SEED, MAX_MIN_GAP, MAX_SEED
from autoplacer.core.exceptions import PlacerError, ValidationError
from autoplacer.core.models import PlacementJob
from autoplacer.data.normalization import clamp_int
from autoplacer.engine.grid import GridIndex
from autoplacer.engine.runner import PlacementRunner
from autoplacer.io.scene import SceneTarget, build_scene, load_job
from autoplacer.utils.logger import configure_logging, get_logger
from autoplacer.utils.pretty import print_run_summary


LOGGER = get_logger("autoplacer.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Place answers and frenzy letters onto a puzzle grid scene",
    )
    parser.add_argument("--scene", type=Path, help="Scene JSON to read (and update)")
    parser.add_argument("--rows", type=int, help="Build a synthetic scene with this many rows")
    parser.add_argument("--cols", type=int, help="Build a synthetic scene with this many columns")
    parser.add_argument("--job", type=Path, help="Job JSON with per-row form values and config")
    parser.add_argument("--output", type=Path, help="Where to write the updated scene JSON")
    parser.add_argument("--seed", type=int, default=None, help="Base seed (overrides the job)")
    parser.add_argument(
        "--min-gap",
        type=int,
        default=None,
        help="Minimum Chebyshev gap for random letters (overrides the job)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--auto-frenzy",
        dest="auto_frenzy",
        action="store_const",
        const=True,
        default=None,
        help="Generate frenzy letters for every row",
    )
    mode.add_argument(
        "--manual",
        dest="auto_frenzy",
        action="store_const",
        const=False,
        help="Only use typed frenzy letters",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail the run when random letters cannot be placed",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--search-detail",
        action="store_true",
        help="Keep per-attempt placement logs at DEBUG",
    )
    parser.add_argument("--show", action="store_true", help="Print the grid and per-row details")
    return parser


def apply_overrides(job: PlacementJob, args: argparse.Namespace) -> PlacementJob:
    """Flags win over the job file; numeric flags are clamped like form input."""

    config = job.config
    if args.seed is not None:
        config = replace(config, seed=clamp_int(args.seed, 0, MAX_SEED, DEFAULT_SEED))
    if args.min_gap is not None:
        config = replace(config, min_gap=clamp_int(args.min_gap, 0, MAX_MIN_GAP, DEFAULT_MIN_GAP))
    if args.auto_frenzy is not None:
        config = replace(config, auto_frenzy=args.auto_frenzy)
    if args.strict:
        config = replace(config, strict_placement=True)
    return replace(job, config=config)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level, search_detail=args.search_detail)

    if args.scene is None and (args.rows is None or args.cols is None):
        parser.error("provide --scene or both --rows and --cols")
    if args.scene is not None and (args.rows is not None or args.cols is not None):
        parser.error("--scene cannot be combined with --rows/--cols")

    try:
        scene = SceneTarget.from_file(args.scene) if args.scene else build_scene(args.rows, args.cols)
        job = load_job(args.job) if args.job else PlacementJob()
    except PlacerError as exc:
        LOGGER.error("%s", exc)
        return 1
    job = apply_overrides(job, args)

    runner = PlacementRunner(scene)
    try:
        report = runner.run(job)
    except ValidationError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    except PlacerError as exc:
        LOGGER.error("Placement failed: %s", exc)
        return 1

    if args.show:
        print_run_summary(scene, GridIndex.from_target(scene), report)
    else:
        print(report.log)

    if args.output:
        scene.to_file(args.output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
