from __future__ import annotations
from collections.abc import Iterable
from typing import NamedTuple
from .env import Environment
from .styles import Painter
from .styles import StyleClass as SC
from .vcs import RepositoryState, StatusFlag


class Segment(NamedTuple):
    #: The text to show, or `None` for the shell's own prompt symbol (``$`` in
    #: Bash, ``%#`` in zsh), which needs no escaping
    text: str | None

    klass: SC


def compose_ps1(
    env: Environment, repo: RepositoryState | None
) -> tuple[Segment, ...]:
    """
    Lay out the primary prompt: ``user@host:cwd``, then the repository's
    branch (if any), then the prompt symbol
    """
    segments = [
        Segment(env.user, SC.USER),
        Segment("@", SC.SEPARATOR),
        Segment(env.hostname, SC.HOST),
        Segment(":", SC.SEPARATOR),
        Segment(env.cwdstr, SC.CWD),
    ]
    if repo is not None:
        segments.append(Segment(" on ", SC.SEPARATOR))
        # Branch color depends on whether there are uncommitted changes:
        segments.append(
            Segment(repo.branch, SC.VCS_DIRTY if repo.dirty else SC.VCS_CLEAN)
        )
        if repo.flags:
            segments.append(Segment(" ", SC.SEPARATOR))
            segments.append(
                Segment(f"[{StatusFlag.display(repo.flags)}]", SC.VCS_FLAGS)
            )
    segments.append(Segment(" ", SC.SEPARATOR))
    # Prompt symbol color depends on the exit status of the last command:
    segments.append(
        Segment(None, SC.PROMPT_SUCCESS if env.status == 0 else SC.PROMPT_FAILURE)
    )
    segments.append(Segment(" ", SC.SEPARATOR))
    return tuple(segments)


def compose_ps2() -> tuple[Segment, ...]:
    """Lay out the continuation prompt.  It never shows repository state."""
    return (Segment(">", SC.CONTINUATION), Segment(" ", SC.SEPARATOR))


def render(segments: Iterable[Segment], paint: Painter) -> str:
    """Paint each segment and join them into a single prompt string"""
    s = ""
    for seg in segments:
        if seg.text is None:
            s += paint.terminator(seg.klass)
        else:
            s += paint(seg.text, seg.klass)
    return s
