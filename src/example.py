"""
Module with example code for screening students and allocating interview slots.

There are three ways to run the code:

1. Run the code with default options. This will generate a synthetic
    cohort and drive, screen the cohort and allocate slots for the eligible.
2. Run the code with custom students and a custom check list defined via code.
3. Run the code with students, drives, panels and schedule pre-defined in
    JSON files.

Usage via cli:
    python3 -m src.example --option 1
"""

from __future__ import annotations

import argparse
from datetime import date

from placement import Drive, DriveStatus, InterviewPanel, ScheduleConfig, Student
from placement.eligibility import CheckSpec, batch_check_eligibility
from placement.eligibility.checks import (
    BacklogCheck,
    BatchCheck,
    CgpaCheck,
    DebarredCheck,
    DriveStatusCheck,
    ProgramCheck,
    TierCheck,
)
from placement.generate.cohort import CohortGenConfig, create_drive, create_students
from placement.log_setup import init_logging
from placement.main import main as cli_main
from placement.main import run_allocation, screen_students
from placement.scheduling import LunchBreak
from placement.students import DriveEligibility, PlacementStatus

INTERVIEW_DAY = date(2026, 11, 2)

panels = [
    InterviewPanel(id="P1", name="Panel A", interviewers=("HR Lead",)),
    InterviewPanel(id="P2", name="Panel B", interviewers=("Tech Lead",)),
    InterviewPanel(id="P3", name="Panel C", interviewers=("Senior Engineer",)),
]

schedule = ScheduleConfig(
    date=INTERVIEW_DAY,
    start_time="09:30",
    end_time="16:30",
    slot_duration=30,
    break_duration=5,
    lunch_break=LunchBreak("13:00", "14:00"),
)


def _example_check_specs() -> list[CheckSpec]:
    """Relaxed pipeline for option 2: no batch restriction, one backlog allowed."""
    return [
        CheckSpec(cls=DebarredCheck, order=10),
        CheckSpec(cls=DriveStatusCheck, order=20),
        CheckSpec(cls=CgpaCheck, order=30),
        CheckSpec(cls=BacklogCheck, order=40, settings={"max_backlogs": 1}),
        CheckSpec(cls=ProgramCheck, order=50),
        CheckSpec(cls=BatchCheck, order=60, enabled=False),
        CheckSpec(cls=TierCheck, order=70),
    ]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run placement examples.")
    parser.add_argument(
        "--option",
        type=int,
        default=1,
        choices=(1, 2, 3),
        help="Example scenario to run (default: 1).",
    )
    return parser.parse_args()


def run_option(option: int) -> None:
    print(f"Running example code with option {option}")

    # Synthetic cohort and drive, screened and then scheduled.
    if option == 1:
        cohort = create_students(
            CohortGenConfig(
                n=60, placed_pct=0.2, debarred_pct=0.02, reference_date=INTERVIEW_DAY
            )
        )
        drive = create_drive(6.5, drive_id="drive_demo", company_name="Demo Corp")
        eligible = screen_students(cohort, drive)
        run_allocation(eligible, panels, schedule, out_dir="outputs")

    # Hand-built students with a custom check list.
    elif option == 2:
        students = [
            Student(
                id="s1",
                name="A",
                roll_number="IC-2K23-1",
                cgpa=7.4,
                active_backlogs=1,
                program_code="MCA_INT",
                batch="2023-2029",
            ),
            Student(
                id="s2",
                name="B",
                roll_number="IT-2K22-4",
                cgpa=8.2,
                active_backlogs=0,
                program_code="MTECH_IT",
                batch="2022-2027",
                placement_status=PlacementStatus(),
            ),
        ]
        drive = Drive(
            id="drive_custom",
            tier="dream",
            status=DriveStatus.OPEN,
            eligibility=DriveEligibility(
                min_cgpa=7.0, allowed_programs=["MCA_INT", "MTECH_IT"]
            ),
        )
        for sid, result in batch_check_eligibility(
            students, drive, checks=_example_check_specs()
        ).items():
            print(f"{sid}: eligible={result.eligible} ({result.reason})")

    # Everything from JSON files. Typical production use.
    elif option == 3:
        cli_main(
            [
                "--students",
                "src/example_students.json",
                "--drives",
                "src/example_drives.json",
                "--panels",
                "src/example_panels.json",
                "--schedule",
                "src/example_schedule.json",
                "--out-dir",
                "outputs",
            ]
        )
    else:
        raise SystemExit(f"Unknown option {option}")


def main() -> None:
    args = parse_args()
    init_logging()
    run_option(args.option)


if __name__ == "__main__":
    main()
