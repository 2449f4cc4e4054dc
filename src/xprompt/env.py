from __future__ import annotations
from dataclasses import dataclass
import getpass
import logging
import os
from pathlib import Path, PurePath
import socket

log = logging.getLogger(__name__)

#: Default maximum display length of the path to the current working directory
MAX_CWD_LEN = 30

#: Shown in place of a user name or hostname that cannot be determined
UNKNOWN = "[unknown]"

#: Environment variable from which the previous command's exit status is read
#: when it is not given on the command line
STATUS_ENVVAR = "XPROMPT_STATUS"


@dataclass(frozen=True)
class Environment:
    """The facts about the calling shell that the prompt is built from"""

    user: str
    hostname: str

    #: The current working directory, as the shell sees it (i.e., with
    #: symlinks unresolved)
    cwd: Path

    #: The user's home directory, or `None` if it cannot be determined
    home: Path | None

    #: Exit status of the previous command run in the shell
    status: int

    @classmethod
    def get(cls, status: int | None = None) -> Environment:
        """
        Capture a snapshot of the environment.  Nothing in here fails: any
        value that cannot be looked up is replaced with a placeholder.
        """
        return cls(
            user=get_user(),
            hostname=get_hostname(),
            cwd=get_cwd(),
            home=get_home(),
            status=get_status() if status is None else status,
        )

    @property
    def cwdstr(self) -> str:
        return cwdstr(self.cwd, self.home)


def get_user() -> str:
    if user := os.environ.get("USER"):
        return user
    try:
        return getpass.getuser()
    except (KeyError, OSError) as e:
        # getpass raises KeyError (or OSError on Python 3.13+) when the UID
        # has no passwd entry
        log.debug("Could not determine user name: %s", e)
        return UNKNOWN


def get_hostname() -> str:
    try:
        return socket.gethostname() or UNKNOWN
    except OSError as e:
        log.debug("Could not determine hostname: %s", e)
        return UNKNOWN


def get_cwd() -> Path:
    # Prefer $PWD to os.getcwd() as the former does not resolve symlinks
    if pwd := os.environ.get("PWD"):
        return Path(pwd)
    try:
        return Path(os.getcwd())
    except OSError as e:
        # The working directory has been deleted out from under us
        log.debug("Could not determine working directory: %s", e)
        return Path("/")


def get_home() -> Path | None:
    if home := os.environ.get("HOME"):
        return Path(home)
    try:
        return Path.home()
    except (KeyError, RuntimeError) as e:
        log.debug("Could not determine home directory: %s", e)
        return None


def get_status() -> int:
    value = os.environ.get(STATUS_ENVVAR, "").strip()
    if not value:
        return 0
    try:
        return int(value)
    except ValueError:
        log.debug("Ignoring non-integer $%s: %r", STATUS_ENVVAR, value)
        return 0


def cwdstr(cwd: PurePath, home: PurePath | None) -> str:
    """
    Show the path to the current working directory.  If the directory is at or
    under ``home``, the path will start with ``~/``.  The path will also be
    truncated to be no more than `MAX_CWD_LEN` characters long.
    """
    if home is not None and home != PurePath(home.anchor):
        try:
            cwd = "~" / cwd.relative_to(home)
        except ValueError:
            pass
    return shortpath(cwd)


def shortpath(p: PurePath, max_len: int = MAX_CWD_LEN) -> str:
    """
    If the filepath ``p`` is too long (longer than ``max_len``), cut off
    leading components to make it fit; if that's not enough, also truncate the
    final component.  Deleted bits are replaced with ellipses.
    """
    assert len(p.parts) > 0
    if len(str(p)) > max_len:
        p = PurePath("…", *p.parts[1 + (p.parts[0] == "/") :])
        while len(str(p)) > max_len:
            if len(p.parts) > 2:
                p = PurePath("…", *p.parts[2:])
            else:
                p = PurePath("…", p.parts[1][: max_len - 3] + "…")
                assert len(str(p)) <= max_len
    return str(p)
