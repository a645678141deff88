"""Per-file and per-run cleanup reports."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class FileStatus(str, Enum):
    MODIFIED = "modified"
    UNCHANGED = "unchanged"
    ERROR = "error"


class FileReport(BaseModel):
    file_name: str
    status: FileStatus
    counters: dict[str, int] = Field(default_factory=dict)
    notes: list[str] = Field(default_factory=list)
    error: str = ""
    backup_path: str | None = None


class RunSummary(BaseModel):
    directory: str
    reports: list[FileReport] = Field(default_factory=list)

    def _count(self, status: FileStatus) -> int:
        return sum(1 for r in self.reports if r.status == status)

    @property
    def files_processed(self) -> int:
        """Files cleaned without error, modified or not."""
        return len(self.reports) - self.files_failed

    @property
    def files_modified(self) -> int:
        return self._count(FileStatus.MODIFIED)

    @property
    def files_unchanged(self) -> int:
        return self._count(FileStatus.UNCHANGED)

    @property
    def files_failed(self) -> int:
        return self._count(FileStatus.ERROR)
