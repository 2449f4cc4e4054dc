from __future__ import annotations
from pathlib import Path
import pytest
from xprompt.env import Environment
from xprompt.prompt import Segment, compose_ps1, compose_ps2, render
from xprompt.styles import (
    THEME,
    ANSIStyler,
    BashStyler,
    Color,
    Painter,
    ZshStyler,
)
from xprompt.styles import StyleClass as SC
from xprompt.vcs import RepositoryState, StatusFlag

ENV = Environment(
    user="alice",
    hostname="host",
    cwd=Path("/home/alice/project"),
    home=Path("/home/alice"),
    status=0,
)

FAILED_ENV = Environment(
    user="alice",
    hostname="host",
    cwd=Path("/home/alice/project"),
    home=Path("/home/alice"),
    status=1,
)

CLEAN = RepositoryState.from_flags("main", [])

DIRTY = RepositoryState.from_flags(
    "main", [StatusFlag.MODIFIED, StatusFlag.UNTRACKED]
)

PREFIX = "\x1B[94malice\x1B[m@\x1B[91mhost\x1B[m:\x1B[96m~/project\x1B[m"


@pytest.mark.parametrize(
    "env,repo,rendered",
    [
        pytest.param(
            ENV,
            None,
            PREFIX + " \x1B[32;1m$\x1B[m ",
            id="simple",
        ),
        pytest.param(
            ENV,
            CLEAN,
            PREFIX + " on \x1B[92mmain\x1B[m \x1B[32;1m$\x1B[m ",
            id="clean",
        ),
        pytest.param(
            ENV,
            DIRTY,
            (
                PREFIX
                + " on \x1B[93mmain\x1B[m"
                + " \x1B[34;1m[?!]\x1B[m"
                + " \x1B[32;1m$\x1B[m "
            ),
            id="dirty",
        ),
        pytest.param(
            ENV,
            RepositoryState.from_flags("main", [StatusFlag.STASHED]),
            PREFIX + " on \x1B[92mmain\x1B[m \x1B[34;1m[$]\x1B[m \x1B[32;1m$\x1B[m ",
            id="stashed-only",
        ),
        pytest.param(
            FAILED_ENV,
            None,
            PREFIX + " \x1B[31;1m$\x1B[m ",
            id="failed",
        ),
        pytest.param(
            FAILED_ENV,
            DIRTY,
            (
                PREFIX
                + " on \x1B[93mmain\x1B[m"
                + " \x1B[34;1m[?!]\x1B[m"
                + " \x1B[31;1m$\x1B[m "
            ),
            id="failed-dirty",
        ),
    ],
)
def test_render_ps1_ansi(
    env: Environment, repo: RepositoryState | None, rendered: str
) -> None:
    paint = Painter(ANSIStyler(), THEME)
    assert render(compose_ps1(env, repo), paint) == rendered


def test_compose_ps1_order() -> None:
    assert compose_ps1(ENV, CLEAN) == (
        Segment("alice", SC.USER),
        Segment("@", SC.SEPARATOR),
        Segment("host", SC.HOST),
        Segment(":", SC.SEPARATOR),
        Segment("~/project", SC.CWD),
        Segment(" on ", SC.SEPARATOR),
        Segment("main", SC.VCS_CLEAN),
        Segment(" ", SC.SEPARATOR),
        Segment(None, SC.PROMPT_SUCCESS),
        Segment(" ", SC.SEPARATOR),
    )


@pytest.mark.parametrize("status", [1, 2, 127, 130, 255, -1])
def test_nonzero_status_is_failure(status: int) -> None:
    env = Environment(
        user="alice",
        hostname="host",
        cwd=Path("/tmp"),
        home=Path("/home/alice"),
        status=status,
    )
    assert compose_ps1(env, None)[-2] == Segment(None, SC.PROMPT_FAILURE)


def test_no_vcs_segment_without_repository() -> None:
    klasses = {seg.klass for seg in compose_ps1(ENV, None)}
    assert not klasses & {SC.VCS_CLEAN, SC.VCS_DIRTY, SC.VCS_FLAGS}


def test_render_ps1_bash() -> None:
    paint = Painter(BashStyler(), THEME)
    assert render(compose_ps1(ENV, CLEAN), paint) == (
        r"\[\e[94m\]alice\[\e[m\]@\[\e[91m\]host\[\e[m\]:"
        r"\[\e[96m\]~/project\[\e[m\] on \[\e[92m\]main\[\e[m\]"
        r" \[\e[32;1m\]\$\[\e[m\] "
    )


def test_render_ps1_bash_escapes_backslashes() -> None:
    env = Environment(
        user="alice",
        hostname="host",
        cwd=Path("/tmp/back\\slash"),
        home=Path("/home/alice"),
        status=0,
    )
    paint = Painter(BashStyler(), THEME)
    assert r"\[\e[96m\]/tmp/back\\slash\[\e[m\]" in render(
        compose_ps1(env, None), paint
    )


def test_render_ps1_zsh() -> None:
    env = Environment(
        user="alice",
        hostname="host",
        cwd=Path("/tmp/100%"),
        home=Path("/home/alice"),
        status=1,
    )
    paint = Painter(ZshStyler(), THEME)
    assert render(compose_ps1(env, DIRTY), paint) == (
        "%F{12}alice%f@%F{9}host%f:%F{14}/tmp/100%%%f"
        " on %F{11}main%f %F{4}%B[?!]%b%f"
        " %F{1}%B%#%b%f "
    )


def test_compose_ps2() -> None:
    segments = compose_ps2()
    assert all(seg.klass is not SC.VCS_CLEAN for seg in segments)
    assert all(seg.klass is not SC.VCS_DIRTY for seg in segments)
    assert render(segments, Painter(ANSIStyler(), THEME)) == "\x1B[33m>\x1B[m "
    assert render(segments, Painter(BashStyler(), THEME)) == r"\[\e[33m\]>\[\e[m\] "
    assert render(segments, Painter(ZshStyler(), THEME)) == "%F{3}>%f "


@pytest.mark.parametrize(
    "s,escaped",
    [
        ("main", "main"),
        ("back\\slash", r"back\\slash"),
        ("$(touch${IFS}/tmp/x)", r"\\$(touch\\${IFS}/tmp/x)"),
        ("`id`", r"\\`id\\`"),
        ("$HOME", r"\\$HOME"),
    ],
)
def test_bash_escape(s: str, escaped: str) -> None:
    assert BashStyler().escape(s) == escaped


def test_render_ps1_bash_escapes_substitutions() -> None:
    repo = RepositoryState.from_flags("$(touch${IFS}x)`id`", [])
    paint = Painter(BashStyler(), THEME)
    assert r" on \[\e[92m\]\\$(touch\\${IFS}x)\\`id\\`\[\e[m\]" in render(
        compose_ps1(ENV, repo), paint
    )


@pytest.mark.parametrize(
    "color,param",
    [
        (Color.RED, 31),
        (Color.GREEN, 32),
        (Color.YELLOW, 33),
        (Color.BLUE, 34),
        (Color.LIGHT_RED, 91),
        (Color.LIGHT_GREEN, 92),
        (Color.LIGHT_YELLOW, 93),
        (Color.LIGHT_BLUE, 94),
        (Color.LIGHT_CYAN, 96),
    ],
)
def test_color_asfg(color: Color, param: int) -> None:
    assert color.asfg() == param


def test_theme_uses_every_color() -> None:
    assert {style.color for style in THEME.values()} - {None} == set(Color)
