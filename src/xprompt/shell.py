from __future__ import annotations
import shlex
import sys

#: Name of the shell function installed by the ``init`` snippets
HOOK = "__xprompt_precmd"

BASH_INIT = """\
{hook}() {{
    local __xprompt_status=$?
    PS1="$({command} ps1 --bash "$__xprompt_status")"
    PS2="$({command} ps2 --bash)"
    return $__xprompt_status
}}
if [[ ";${{PROMPT_COMMAND:-}};" != *";{hook};"* ]]; then
    PROMPT_COMMAND="{hook}${{PROMPT_COMMAND:+;$PROMPT_COMMAND}}"
fi
"""

ZSH_INIT = """\
{hook}() {{
    local __xprompt_status=$?
    PS1="$({command} ps1 --zsh "$__xprompt_status")"
    PS2="$({command} ps2 --zsh)"
}}
typeset -ga precmd_functions
if (( ! ${{precmd_functions[(I){hook}]}} )); then
    precmd_functions=({hook} $precmd_functions)
fi
"""

#: Map from the shell names accepted by ``xprompt init`` to their snippets
INIT_SCRIPTS = {
    "bash": BASH_INIT,
    "zsh": ZSH_INIT,
}


def default_command() -> str:
    """
    Return a shell command that runs this program with the current Python
    interpreter, so that the hook keeps working even if ``xprompt`` is not on
    the shell's :envvar:`PATH`
    """
    return f"{shlex.quote(sys.executable)} -m xprompt"


def init_script(shell: str, command: str | None = None) -> str:
    """
    Return shell code that, when evaluated by ``shell``, makes the shell
    recompute :envvar:`PS1` and :envvar:`PS2` by running ``command`` before
    every prompt.  The hook grabs ``$?`` before doing anything else so that
    the exit status of the user's last command reaches ``command ps1``.

    :raises KeyError: if ``shell`` is not a supported shell
    """
    if command is None:
        command = default_command()
    return INIT_SCRIPTS[shell].format(hook=HOOK, command=command)
