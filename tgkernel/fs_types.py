"""File status types and the standard file descriptors."""

from __future__ import annotations

from dataclasses import dataclass

STDIN = 0
STDOUT = 1
STDDEBUG = 2


class StatMode:
    """File type and permission bits, following the Linux convention."""

    S_IFMT = 0o170000
    S_IFREG = 0o100000
    S_IFDIR = 0o040000
    DEFAULT_FILE_PERM = 0o644
    DEFAULT_DIR_PERM = 0o755


@dataclass
class Stat:
    """The minimal Linux-compatible subset of file status."""

    st_dev: int = 0
    st_ino: int = 0
    st_mode: int = 0
    st_nlink: int = 0
    st_size: int = 0

    def is_dir(self) -> bool:
        """Whether the mode describes a directory."""
        return self.st_mode & StatMode.S_IFMT == StatMode.S_IFDIR

    def is_file(self) -> bool:
        """Whether the mode describes a regular file."""
        return self.st_mode & StatMode.S_IFMT == StatMode.S_IFREG