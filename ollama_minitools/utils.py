"""
Utility functions for the Ollama Mini Tools CLI.

External programs and interactive input are reached through the small
capability objects defined here, so command handlers can be exercised
with canned runners and answers.
"""
import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from ollama_minitools.config import Settings
from ollama_minitools.errors import DelegationError

logger = logging.getLogger("ollama_minitools.utils")


@dataclass(frozen=True)
class CommandResult:
    """Exit status and (when captured) standard output of an external command."""
    returncode: int
    output: Optional[str] = None


class CommandRunner:
    """
    Runs external commands synchronously.
    """

    def run(self, name: str, args: Sequence[str], capture: bool = False) -> CommandResult:
        """
        Run an external command and wait for it to finish.

        Args:
            name (str): Executable name or path
            args: Arguments passed to the executable
            capture (bool): Capture stdout as text instead of inheriting it

        Returns:
            CommandResult: Exit code and captured output

        Raises:
            DelegationError: If the executable cannot be started
        """
        cmd = [name, *args]
        logger.debug(f"Running: {shlex.join(cmd)}")
        try:
            completed = subprocess.run(
                cmd,
                stdout=subprocess.PIPE if capture else None,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            raise DelegationError(
                f"Command not found: {name}",
                [f"Make sure '{name}' is installed and available in your PATH."],
            )
        except PermissionError:
            raise DelegationError(
                f"Command is not executable: {name}",
                ["Check the file permissions of the command."],
            )
        logger.debug(f"{name} exited with code {completed.returncode}")
        return CommandResult(completed.returncode, completed.stdout if capture else None)


class ConsoleInput:
    """Reads answers from the interactive terminal."""

    def ask(self, question: str, default: str) -> str:
        answer = input(f"{question} [{default}]: ").strip()
        return answer or default


def confirm(provider, question: str) -> bool:
    """Ask a yes/no question; only 'y' or 'Y' counts as yes."""
    answer = provider.ask(question, "n")
    return answer in ("y", "Y")


@dataclass(frozen=True)
class CommandContext:
    """Everything a command handler needs besides its invocation."""
    settings: Settings
    runner: CommandRunner
    prompt: ConsoleInput
