from __future__ import annotations
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
import logging
from pathlib import Path
import re
import subprocess
from .util import ancestors, cat

log = logging.getLogger(__name__)

#: Default maximum runtime (in seconds) of ``git status`` before the VCS
#: segment is given up on
GIT_TIMEOUT = 3

#: Number of hex digits of the commit hash shown for a detached ``HEAD``
SHORT_HASH_LEN = 7


class VCSError(Exception):
    """Raised when a repository's metadata is missing or malformed"""


class StatusFlag(Enum):
    """
    The kinds of changes that can be present in a working tree.  The value of
    each enumeration is the character used to show it in a prompt, and the
    enumerations are declared in display order.
    """

    UNTRACKED = "?"
    MODIFIED = "!"
    STAGED = "+"
    STASHED = "$"

    @classmethod
    def display(cls, flags: Iterable[StatusFlag]) -> str:
        flagset = set(flags)
        return "".join(f.value for f in cls if f in flagset)


@dataclass(frozen=True)
class Repository:
    #: The directory holding the repository's metadata (usually ``.git``)
    git_dir: Path

    #: The top level of the working tree
    worktree: Path


@dataclass(frozen=True)
class RepositoryState:
    #: The name of the current branch, or the short form of the current commit
    #: hash if ``HEAD`` is detached
    branch: str

    #: `True` iff the working tree has staged, unstaged, conflicted, or
    #: untracked changes
    dirty: bool

    #: Which kinds of changes are present
    flags: frozenset[StatusFlag] = frozenset()

    @classmethod
    def from_flags(
        cls, branch: str, flags: Iterable[StatusFlag]
    ) -> RepositoryState:
        flagset = frozenset(flags)
        return cls(
            branch=branch,
            dirty=bool(flagset - {StatusFlag.STASHED}),
            flags=flagset,
        )


def inspect_repository(
    start: Path, timeout: float = GIT_TIMEOUT
) -> RepositoryState | None:
    """
    If ``start`` is in a Git repository, return a `RepositoryState` describing
    the repository's current branch & working tree.

    If ``start`` is not in a Git repository, or if the repository's metadata
    cannot be read, or if Git is not installed, or if the runtime of ``git
    status`` exceeds ``timeout``, return `None`.  The prompt must be printable
    no matter what state the filesystem is in, so no error escapes from here.
    """
    try:
        repo = find_repository(start)
        if repo is None:
            log.debug("No Git repository at or above %s", start)
            return None
        branch = read_head(repo.git_dir)
        flags = status_flags(repo.worktree, timeout=timeout)
    except (
        OSError,
        RuntimeError,
        UnicodeDecodeError,
        subprocess.SubprocessError,
        VCSError,
    ) as e:
        # RuntimeError: symlink loop when resolving ``start`` (before 3.13)
        log.debug("Could not inspect repository for %s: %s", start, e)
        return None
    return RepositoryState.from_flags(branch, flags)


def find_repository(start: Path) -> Repository | None:
    """
    Search ``start`` and each of its ancestors in turn for a ``.git`` entry
    and return the first repository found.  Returns `None` if the filesystem
    root is reached without finding one.  Symlinks in ``start`` are resolved
    first, as Git itself does.
    """
    for d in ancestors(start.resolve()):
        marker = d / ".git"
        if marker.is_dir():
            return Repository(git_dir=marker, worktree=d)
        elif marker.is_file():
            # Linked worktrees & submodules use a file pointing elsewhere
            return Repository(git_dir=read_gitfile(marker), worktree=d)
    return None


def read_gitfile(path: Path) -> Path:
    """
    Return the Git directory that the ``.git`` file at ``path`` points to.
    Relative paths are resolved against the directory containing the file.
    """
    content = path.read_text(encoding="utf-8")
    m = re.match(r"gitdir:[ \t]*(\S.*)", content)
    if not m:
        raise VCSError(f"{path}: not a gitdir pointer")
    git_dir = path.parent / m[1].strip()
    if not git_dir.is_dir():
        raise VCSError(f"{path}: {git_dir} is not a directory")
    return git_dir


def read_head(git_dir: Path) -> str:
    """
    Return a description of the repository's ``HEAD``: the name of the current
    branch (without the ``refs/heads/`` prefix), or the short form of the
    commit hash if ``HEAD`` is detached
    """
    head = cat(git_dir / "HEAD")
    if head is None:
        raise VCSError(f"{git_dir}: no HEAD file")
    if m := re.fullmatch(r"ref:\s*(\S+)", head):
        return re.sub(r"^refs/(heads/)?", "", m[1])
    elif re.fullmatch(r"[0-9a-f]{40}|[0-9a-f]{64}", head):
        return head[:SHORT_HASH_LEN]
    else:
        raise VCSError(f"{git_dir}: unrecognized HEAD contents: {head!r}")


def status_flags(
    worktree: Path, timeout: float = GIT_TIMEOUT
) -> frozenset[StatusFlag]:
    """
    Run ``git status`` in ``worktree`` and return the kinds of changes it
    reports, plus `StatusFlag.STASHED` if there are any stashed changes.

    Raises `subprocess.CalledProcessError` if ``git status`` fails and
    `subprocess.TimeoutExpired` if it takes longer than ``timeout``.
    """
    # --no-optional-locks keeps `git status` from rewriting the index
    r = subprocess.run(
        ["git", "--no-optional-locks", "status", "--porcelain"],
        cwd=worktree,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        check=True,
        text=True,
        timeout=timeout,
    )
    flags: set[StatusFlag] = set()
    for line in r.stdout.splitlines():
        if line.startswith("??"):
            flags.add(StatusFlag.UNTRACKED)
        elif line.startswith("!!") or len(line) < 2:
            continue
        elif "U" in line[:2] or line[:2] in ("AA", "DD"):
            # Merge conflict
            flags.add(StatusFlag.MODIFIED)
        else:
            if line[0] != " ":
                flags.add(StatusFlag.STAGED)
            if line[1] != " ":
                flags.add(StatusFlag.MODIFIED)
    stash = git(
        "rev-parse", "--verify", "--quiet", "refs/stash", cwd=worktree, timeout=timeout
    )
    if stash is not None:
        flags.add(StatusFlag.STASHED)
    return frozenset(flags)


def git(
    *args: str, cwd: Path | None = None, timeout: float | None = None
) -> str | None:
    """
    Run a Git command (suppressing stderr) and return its stdout with leading &
    trailing whitespace stripped.  If the command fails, return `None`.  If it
    runs longer than ``timeout``, `subprocess.TimeoutExpired` is raised.
    """
    try:
        return subprocess.run(
            ["git", *args],
            cwd=cwd,
            check=True,
            timeout=timeout,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
        ).stdout.strip()
    except subprocess.CalledProcessError:
        return None
