from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class SweepConfig:
    directories: tuple[str, ...]
    extensions: tuple[str, ...]
    pattern: str
    min_age_days: int
    recursive: bool

    def __str__(self) -> str:
        return (
            f"{{Directories: {'|'.join(self.directories)}, "
            f"Extensions: {'|'.join(self.extensions)}, "
            f"Pattern: {self.pattern}, "
            f"DaysOfExpiration: {self.min_age_days}, "
            f"SearchInSubdirectories: {self.recursive}}}"
        )


@dataclass(frozen=True)
class SweepResult:
    files_deleted: int = 0
    bytes_deleted: int = 0
    failures: int = 0  # recoverable errors, never subtracted from the counts

    def __add__(self, other: SweepResult) -> SweepResult:
        if not isinstance(other, SweepResult):
            return NotImplemented
        return SweepResult(
            files_deleted=self.files_deleted + other.files_deleted,
            bytes_deleted=self.bytes_deleted + other.bytes_deleted,
            failures=self.failures + other.failures,
        )


@dataclass(frozen=True)
class FileCandidate:
    name: str
    path: str
    is_dir: bool
    mtime: float
    size: int

    @classmethod
    def from_entry(cls, entry: os.DirEntry, path: str) -> FileCandidate:
        stat = entry.stat(follow_symlinks=False)
        return cls(
            name=entry.name,
            path=path,
            is_dir=entry.is_dir(follow_symlinks=False),
            mtime=stat.st_mtime,
            size=stat.st_size,
        )

    def days_old(self, now: float) -> int:
        # Whole hours first, then whole days.
        hours = int((now - self.mtime) / 3600)
        return max(0, hours // 24)
