"""
A Git-aware bash/zsh prompt that always prints something

``xprompt`` prints a colorized prompt string for Bash and zsh showing the
current user, hostname, and working directory, followed by the current Git
branch when inside a repository.  The branch is green when the working tree is
clean and yellow when there are uncommitted changes, and the prompt symbol is
green or red depending on whether the previous command succeeded.

Install the prompt by adding ``eval "$(xprompt init bash)"`` to ``~/.bashrc``
or ``eval "$(xprompt init zsh)"`` to ``~/.zshrc``.
"""

__version__ = "0.1.0"
__license__ = "MIT"
