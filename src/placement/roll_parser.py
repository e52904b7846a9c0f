"""
Roll-number parsing.

Roll numbers look like ``IC-2K23-55`` or ``IC-2K22-LE-5``:

    PREFIX-2KYY[-LE]-SEQ

PREFIX selects the program, YY is the admission year (2000 + YY), ``-LE``
marks lateral entry (one year shorter) and SEQ is a 1-3 digit sequence >= 1.
Parsing never raises; failures come back as a `RollParseError`.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Literal, Optional

RollErrorCode = Literal[
    "INVALID_FORMAT", "UNKNOWN_PREFIX", "INVALID_YEAR", "INVALID_SEQUENCE"
]

ACADEMIC_YEAR_START_MONTH = 7  # July

_ROLL_RE = re.compile(r"^([A-Z]{2,3})-2K([0-9]{2})(-LE)?-([0-9]{1,3})$")


@dataclass(frozen=True)
class ProgramInfo:
    code: str
    name: str
    full_name: str
    duration: int
    department: str


PROGRAM_PREFIX_MAP: dict[str, ProgramInfo] = {
    "IC": ProgramInfo(
        code="MCA_INT",
        name="MCA (Integrated)",
        full_name="Master of Computer Applications (Integrated)",
        duration=6,
        department="Computer Science",
    ),
    "IM": ProgramInfo(
        code="MBA_MS",
        name="MBA (Management Science)",
        full_name="Master of Business Administration (Management Science)",
        duration=5,
        department="Management",
    ),
    "IT": ProgramInfo(
        code="MTECH_IT",
        name="M.Tech (IT)",
        full_name="Master of Technology (Information Technology)",
        duration=5,
        department="Information Technology",
    ),
    "APR": ProgramInfo(
        code="MBA_APR",
        name="MBA (Advertising & PR)",
        full_name="Master of Business Administration (Advertising & Public Relations)",
        duration=2,
        department="Management",
    ),
    "EN": ProgramInfo(
        code="MBA_ENT",
        name="MBA (Entrepreneurship)",
        full_name="Master of Business Administration (Entrepreneurship)",
        duration=2,
        department="Management",
    ),
    "BC": ProgramInfo(
        code="BCOM_HONS",
        name="B.Com (Hons)",
        full_name="Bachelor of Commerce (Honours)",
        duration=3,
        department="Commerce",
    ),
}


@dataclass(frozen=True)
class ParsedRollNumber:
    roll_number: str
    prefix: str
    program_code: str
    program_name: str
    program_full_name: str
    department: str
    year_code: int
    admission_year: int
    duration: int
    effective_duration: int
    is_lateral_entry: bool
    sequence_number: int
    passing_year: int
    current_year: int
    is_final_year: bool
    is_alumni: bool
    batch: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RollParseError:
    code: RollErrorCode
    message: str
    roll_number: str


@dataclass(frozen=True)
class RollParseResult:
    success: bool
    data: Optional[ParsedRollNumber] = None
    error: Optional[RollParseError] = None


def _fail(code: RollErrorCode, message: str, roll_number: str) -> RollParseResult:
    return RollParseResult(
        success=False, error=RollParseError(code, message, roll_number)
    )


def academic_year(on: date) -> int:
    """Academic year containing `on`; dates before July 1 belong to the previous one."""
    return on.year if on.month >= ACADEMIC_YEAR_START_MONTH else on.year - 1


def parse_roll_number(roll_number: str, today: date | None = None) -> RollParseResult:
    normalized = roll_number.strip().upper()

    match = _ROLL_RE.match(normalized)
    if match is None:
        return _fail(
            "INVALID_FORMAT",
            f'Invalid roll number format: "{roll_number}". '
            "Expected format: PREFIX-2KYY-SEQ (e.g., IC-2K23-55)",
            roll_number,
        )

    prefix, year_str, le_flag, sequence_str = match.groups()

    program = PROGRAM_PREFIX_MAP.get(prefix)
    if program is None:
        return _fail(
            "UNKNOWN_PREFIX",
            f'Unknown program prefix: "{prefix}". '
            f"Valid prefixes: {', '.join(PROGRAM_PREFIX_MAP)}",
            roll_number,
        )

    try:
        year_code = int(year_str)
    except ValueError:
        year_code = -1
    if not 0 <= year_code <= 99:
        return _fail("INVALID_YEAR", f'Invalid year code: "{year_str}"', roll_number)

    try:
        sequence_number = int(sequence_str)
    except ValueError:
        sequence_number = 0
    if sequence_number < 1:
        return _fail(
            "INVALID_SEQUENCE",
            f'Invalid sequence number: "{sequence_str}"',
            roll_number,
        )

    admission_year = 2000 + year_code
    is_lateral_entry = le_flag is not None
    effective_duration = program.duration - 1 if is_lateral_entry else program.duration
    passing_year = admission_year + effective_duration

    current_academic_year = academic_year(today or date.today())
    years_completed = current_academic_year - admission_year
    current_year = min(max(years_completed + 1, 1), effective_duration)

    return RollParseResult(
        success=True,
        data=ParsedRollNumber(
            roll_number=normalized,
            prefix=prefix,
            program_code=program.code,
            program_name=program.name,
            program_full_name=program.full_name,
            department=program.department,
            year_code=year_code,
            admission_year=admission_year,
            duration=program.duration,
            effective_duration=effective_duration,
            is_lateral_entry=is_lateral_entry,
            sequence_number=sequence_number,
            passing_year=passing_year,
            current_year=current_year,
            is_final_year=current_year == effective_duration,
            is_alumni=current_academic_year >= passing_year,
            batch=f"{admission_year}-{passing_year}",
        ),
    )


# ----------------------------
# Convenience utilities
# ----------------------------
def is_valid_roll_number(roll_number: str) -> bool:
    return parse_roll_number(roll_number).success


def get_program_code(roll_number: str) -> Optional[str]:
    result = parse_roll_number(roll_number)
    return result.data.program_code if result.data else None


def get_passing_year(roll_number: str) -> Optional[int]:
    result = parse_roll_number(roll_number)
    return result.data.passing_year if result.data else None


def is_program_match(roll_number: str, program_code: str) -> bool:
    result = parse_roll_number(roll_number)
    return result.data is not None and result.data.program_code == program_code


def is_same_batch(roll_number_1: str, roll_number_2: str) -> bool:
    """Same program and same admission year."""
    first = parse_roll_number(roll_number_1).data
    second = parse_roll_number(roll_number_2).data
    if first is None or second is None:
        return False
    return (
        first.program_code == second.program_code
        and first.admission_year == second.admission_year
    )


def generate_roll_number(
    prefix: str, year: int, sequence: int, lateral_entry: bool = False
) -> str:
    """Build a roll number; `year` may be a full year (2023) or a code (23)."""
    if prefix not in PROGRAM_PREFIX_MAP:
        raise ValueError(f"Unknown program prefix: {prefix!r}")
    year_code = year - 2000 if year >= 2000 else year
    le = "-LE" if lateral_entry else ""
    return f"{prefix}-2K{year_code:02d}{le}-{sequence}"


def get_valid_prefixes() -> list[str]:
    return list(PROGRAM_PREFIX_MAP)


def get_program_info(prefix: str) -> ProgramInfo:
    return PROGRAM_PREFIX_MAP[prefix]


def get_program_info_by_code(program_code: str) -> Optional[tuple[str, ProgramInfo]]:
    for prefix, info in PROGRAM_PREFIX_MAP.items():
        if info.code == program_code:
            return prefix, info
    return None


def is_placement_eligible(roll_number: str, today: date | None = None) -> bool:
    """Final or pre-final year students who have not yet graduated."""
    parsed = parse_roll_number(roll_number, today=today).data
    if parsed is None or parsed.is_alumni:
        return False
    return parsed.current_year >= parsed.effective_duration - 1


def get_batch_string(roll_number: str) -> Optional[str]:
    parsed = parse_roll_number(roll_number).data
    if parsed is None:
        return None
    short_passing = str(parsed.passing_year)[-2:]
    return f"{parsed.program_name} Batch {parsed.admission_year}-{short_passing}"
