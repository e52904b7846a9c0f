from __future__ import annotations

import argparse
import logging
import re
from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt

from placement.config import (
    DEFAULT_ELIGIBILITY_CONFIG,
    EligibilityConfig,
    JsonConfigProvider,
)
from placement.eligibility import (
    batch_check_eligibility,
    eligibility_stats,
    filter_eligible_students,
)
from placement.log_setup import init_logging
from placement.reporting import (
    ReportDocument,
    get_active_report,
    plot_panel_schedule,
    render_allocation_report,
    render_eligibility_report,
    set_active_report,
)
from placement.scheduling import (
    AllocationResult,
    InterviewPanel,
    ScheduleConfig,
    allocate_slots,
    export_slots_by_panel,
    export_slots_to_csv,
    generate_time_slots,
    panels_from_json,
    schedule_config_from_json,
    validate_schedule_config,
)
from placement.scheduling.allocator import Schedulable
from placement.students import Drive, Student, drives_from_json, students_from_json

logger = logging.getLogger(__name__)


def run_allocation(
    students: Sequence[Schedulable],
    panels: Sequence[InterviewPanel],
    config: ScheduleConfig,
    out_dir: str | Path | None = None,
    *,
    validate_config: bool = True,
    enable_reporting: bool = True,
) -> AllocationResult:
    """
    Allocate interview slots and optionally report on / export the result.

    Parameters
    ----------
    validate_config:
        Run `validate_schedule_config` first. Problems are logged as warnings;
        the allocation still runs, since the allocator reports unusable
        configurations itself.
    enable_reporting:
        Print the allocation summary (mirrored into the active PDF report, if any).
    out_dir:
        When given and the allocation succeeded, write ``schedule.csv``, one
        ``schedule_<panel>.csv`` per panel and ``schedule_gantt.png`` there.

    Returns
    -------
    AllocationResult
        Straight from `allocate_slots`.
    """
    if validate_config:
        for problem in validate_schedule_config(config):
            logger.warning("Schedule config: %s", problem)

    result = allocate_slots(students, panels, config)
    if not result.success:
        logger.error("Allocation failed: %s", result.error)

    if enable_reporting:
        capacity = len(generate_time_slots(config)) * len(panels)
        render_allocation_report(result, capacity=capacity)

    if out_dir is not None and result.success:
        _export_schedule(result, panels, Path(out_dir))

    return result


def screen_students(
    students: Sequence[Student],
    drive: Drive,
    config: EligibilityConfig = DEFAULT_ELIGIBILITY_CONFIG,
    *,
    enable_reporting: bool = True,
) -> list[Student]:
    """Keep the students eligible for `drive`, printing the eligibility summary."""
    if enable_reporting:
        render_eligibility_report(
            eligibility_stats(students, drive, config),
            batch_check_eligibility(students, drive, config),
        )
    return filter_eligible_students(students, drive, config)


def _slug(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9]+", "_", name).strip("_").lower() or "panel"


def _export_schedule(
    result: AllocationResult, panels: Sequence[InterviewPanel], out_dir: Path
) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    (out_dir / "schedule.csv").write_text(export_slots_to_csv(result.slots))

    used: set[str] = set()
    for name, text in export_slots_by_panel(result.slots, panels).items():
        slug = base = _slug(name)
        n = 2
        while slug in used:
            slug = f"{base}_{n}"
            n += 1
        if slug != base:
            logger.warning(
                "Panel %r maps to an existing file name; writing schedule_%s.csv",
                name,
                slug,
            )
        used.add(slug)
        (out_dir / f"schedule_{slug}.csv").write_text(text)

    fig = plot_panel_schedule(result, out_dir / "schedule_gantt.png")
    if fig is not None and get_active_report() is None:
        plt.close(fig)
    logger.info("Wrote schedule exports to %s", out_dir)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="placement",
        description="Screen students for a drive and allocate interview slots.",
    )
    parser.add_argument("--students", required=True, type=Path, help="students JSON")
    parser.add_argument("--panels", required=True, type=Path, help="panels JSON")
    parser.add_argument(
        "--schedule", required=True, type=Path, help="schedule config JSON"
    )
    parser.add_argument(
        "--drives",
        type=Path,
        help="drives JSON; students are screened for the schedule's driveId first",
    )
    parser.add_argument(
        "--eligibility-config", type=Path, help="eligibility config JSON"
    )
    parser.add_argument("--out-dir", type=Path, help="directory for CSV/PNG exports")
    parser.add_argument("--report-pdf", type=Path, help="also write a PDF report")
    parser.add_argument("--log-level", default=None)
    parser.add_argument("--json-logs", action="store_true")
    return parser


def _pick_drive(drives: Sequence[Drive], drive_id: str) -> Drive:
    if not drives:
        raise ValueError("Drives file contains no drives.")
    if not drive_id:
        return drives[0]
    for drive in drives:
        if drive.id == drive_id:
            return drive
    raise ValueError(f"Drive {drive_id!r} not found in drives file.")


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point. Returns 0 when the allocation succeeded, 1 otherwise."""
    args = _build_parser().parse_args(argv)
    init_logging(args.log_level, json_format=args.json_logs)

    students: Sequence[Student] = students_from_json(args.students)
    panels = panels_from_json(args.panels)
    schedule = schedule_config_from_json(args.schedule)

    report = ReportDocument(args.report_pdf) if args.report_pdf else None
    set_active_report(report)
    try:
        if args.drives is not None:
            drive = _pick_drive(drives_from_json(args.drives), schedule.drive_id)
            eligibility = (
                JsonConfigProvider(args.eligibility_config).get_config()
                if args.eligibility_config
                else DEFAULT_ELIGIBILITY_CONFIG
            )
            students = screen_students(students, drive, eligibility)

        result = run_allocation(students, panels, schedule, args.out_dir)
    finally:
        set_active_report(None)
        if report is not None:
            report.write()

    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
