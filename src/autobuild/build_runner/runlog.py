"""Per-invocation run log for AutoBuild.

Every line is mirrored to the ``logging`` sink as it is appended and the whole
log is written to a fixed-name file at the end of the run. The file is always
overwritten so it only ever holds the latest run.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

AB_LOG_FILE = "AutoBuildLog.txt"

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

logger = logging.getLogger(__name__)


def format_timestamp(moment: datetime) -> str:
    """Render ``d-MMM-yyyy, dddd, h:mm:ss.fff tt`` independent of the process locale."""
    hour12 = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment.day}-{_MONTHS[moment.month - 1]}-{moment.year:04d}, "
        f"{_WEEKDAYS[moment.weekday()]}, "
        f"{hour12}:{moment.minute:02d}:{moment.second:02d}.{moment.microsecond // 1000:03d} {meridiem}"
    )


class RunLog:
    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or datetime.now
        self._lines: list[str] = []

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def append(self, message: str, level: int = logging.INFO) -> str:
        line = f"{format_timestamp(self._clock())}\t{message}"
        self._lines.append(line)
        logger.log(level, line)
        return line

    def info(self, message: str) -> str:
        return self.append(message, logging.INFO)

    def error(self, message: str) -> str:
        return self.append(message, logging.ERROR)

    def contains(self, message: str) -> bool:
        return any(line.endswith(f"\t{message}") for line in self._lines)

    def render(self) -> str:
        return "".join(f"{line}\n" for line in self._lines)

    def save(self, directory: Path, file_name: str = AB_LOG_FILE) -> Path:
        path = Path(directory) / file_name
        path.write_text(self.render(), encoding="utf-8")
        logger.info("Saving Auto Build Log . Log file path: %s", path.as_posix())
        return path
