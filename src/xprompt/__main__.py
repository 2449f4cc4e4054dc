from __future__ import annotations
import argparse
import logging
import os
import sys
from . import __version__
from .env import Environment
from .prompt import compose_ps1, compose_ps2, render
from .shell import INIT_SCRIPTS, init_script
from .styles import THEME, ANSIStyler, BashStyler, Painter, ZshStyler
from .vcs import inspect_repository

#: Set this environment variable to a nonempty value to log debugging
#: information to stderr
DEBUG_ENVVAR = "XPROMPT_DEBUG"


def main(argv: list[str] | None = None) -> None:
    if os.environ.get(DEBUG_ENVVAR):
        logging.basicConfig(
            format="xprompt: %(name)s: %(message)s",
            level=logging.DEBUG,
            stream=sys.stderr,
        )

    styling = argparse.ArgumentParser(add_help=False)
    styling.add_argument(
        "--ansi",
        action="store_const",
        dest="stylecls",
        const=ANSIStyler,
        help="Format prompt for direct display",
    )
    styling.add_argument(
        "--bash",
        action="store_const",
        dest="stylecls",
        const=BashStyler,
        help="Format prompt for Bash's PS1 (default)",
    )
    styling.add_argument(
        "--zsh",
        action="store_const",
        dest="stylecls",
        const=ZshStyler,
        help="Format prompt for zsh's PS1",
    )

    parser = argparse.ArgumentParser(
        prog="xprompt",
        description="Print a Git-aware bash/zsh prompt",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(
        title="commands", dest="command", metavar="COMMAND", required=True
    )

    ps1 = subparsers.add_parser(
        "ps1", parents=[styling], help="Print the primary prompt"
    )
    ps1.add_argument(
        "status",
        nargs="?",
        type=int,
        help=(
            "Exit status of the previous command"
            "  [default: $XPROMPT_STATUS, else 0]"
        ),
    )

    subparsers.add_parser(
        "ps2", parents=[styling], help="Print the continuation prompt"
    )

    init = subparsers.add_parser(
        "init", help="Print shell code that installs the prompt"
    )
    init.add_argument(
        "shell",
        nargs="?",
        choices=list(INIT_SCRIPTS.keys()),
        default="bash",
        help="The shell to generate code for  [default: bash]",
    )

    args = parser.parse_args(argv)

    if args.command == "init":
        print(init_script(args.shell), end="")
        return
    paint = Painter(styler=(args.stylecls or BashStyler)(), theme=THEME)
    if args.command == "ps1":
        env = Environment.get(status=args.status)
        s = render(compose_ps1(env, inspect_repository(env.cwd)), paint)
    else:
        s = render(compose_ps2(), paint)
    print(s)


if __name__ == "__main__":
    main()
