"""Blocking git process runner"""

import os
import sys
from typing import NamedTuple, Optional, Sequence

import git

from git_deps_keeper.constants import (
    DEFAULT_GIT_EXECUTABLE,
    DEFAULT_GIT_TIMEOUT,
    EXCEPTION_PREFIX,
    TIMEOUT_OUTPUT,
)
from git_deps_keeper.logging_config import get_git_logger

git_logger = get_git_logger()

# Message GitPython puts in stderr after its watchdog killed the process
_WATCHDOG_MARKER = "Timeout: the command"

# Never block on credential prompts (GitPython already forces LC_ALL=C)
_GIT_ENV = {"GIT_TERMINAL_PROMPT": "0"}


class GitResult(NamedTuple):
    """Outcome of one git invocation."""

    success: bool
    output: str


def combine_output(stdout: Optional[str], stderr: Optional[str]) -> str:
    """Join both streams into one line-appended buffer.

    All stdout lines come before all stderr lines: GitPython hands the
    streams back separately, so the order in which git interleaved them
    is lost.
    """
    lines = []
    for stream in (stdout, stderr):
        if stream:
            lines.extend(stream.splitlines())
    return "".join(f"{line}\n" for line in lines)


def first_non_empty_line(text: Optional[str]) -> Optional[str]:
    """First line of text with content, stripped, or None."""
    if not text:
        return None
    for line in text.split("\n"):
        stripped = line.strip()
        if stripped:
            return stripped
    return None


class GitRunner:
    """Runs the git executable and captures its output.

    One child process per call, no retries. Failures are reported through
    GitResult and never raised. The output holds stdout followed by stderr,
    not the order git wrote them in (see combine_output).

    Every command is traced at DEBUG on the git command logger; failures,
    timeouts and launch errors at INFO.
    """

    def __init__(self, executable: str = DEFAULT_GIT_EXECUTABLE, timeout: float = DEFAULT_GIT_TIMEOUT):
        self.executable = executable
        self.timeout = timeout

    def run(self, args: Sequence[str], working_dir: str, timeout: Optional[float] = None) -> GitResult:
        """Run ``git <args>`` in working_dir and wait for it to finish.

        Args:
            args: Arguments passed after the executable
            working_dir: Directory the process starts in
            timeout: Seconds before the process is killed (defaults to self.timeout)

        Returns:
            GitResult(success, combined stdout/stderr)
        """
        timeout = self.timeout if timeout is None else timeout
        command = [self.executable, *args]
        git_logger.debug(f"{' '.join(command)} (in {working_dir})")

        # GitPython silently falls back to the current directory otherwise
        if not working_dir or not os.path.isdir(working_dir):
            output = f"{EXCEPTION_PREFIX}Working directory not found: {working_dir}"
            git_logger.info(output)
            return GitResult(False, output)

        # kill_after_timeout is not supported by GitPython on Windows
        kill_after = None if sys.platform == "win32" else timeout

        try:
            status, stdout, stderr = git.Git(working_dir).execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
                kill_after_timeout=kill_after,
                strip_newline_in_stdout=False,
                env=_GIT_ENV,
            )
        except (git.exc.GitCommandNotFound, git.exc.GitCommandError, OSError) as e:
            output = f"{EXCEPTION_PREFIX}{e}"
            git_logger.info(output)
            return GitResult(False, output)

        if status != 0 and stderr and stderr.startswith(_WATCHDOG_MARKER):
            git_logger.info(f"{' '.join(command)} timed out after {timeout}s")
            return GitResult(False, TIMEOUT_OUTPUT)

        output = combine_output(stdout, stderr)
        if status != 0:
            git_logger.info(f"{' '.join(command)} exited with {status}: {output.strip()}")
        return GitResult(status == 0, output)
