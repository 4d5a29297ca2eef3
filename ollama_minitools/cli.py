#!/usr/bin/env python3
"""
Main CLI entry points for the Ollama Mini Tools application.

Two tools share one dispatcher:
    omodel      - list, export and import Ollama Modelfiles
    gguf-merge  - merge two GGUF files with llama-gguf-split
"""
import argparse
import sys
import logging
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Optional, Tuple

from ollama_minitools import __version__
from ollama_minitools.commands import merge, modelfile
from ollama_minitools.config import Settings, MODELFILE_FILENAME, MERGED_MODEL_FILENAME
from ollama_minitools.errors import ArgumentError, ConfigurationError, FatalError
from ollama_minitools.utils import CommandContext, CommandRunner, ConsoleInput

# ANSI escape codes for colored terminal output
RED = "\033[91m"
YELLOW = "\033[93m"
GREEN = "\033[92m"
CYAN = "\033[96m"
RESET = "\033[0m"

LABEL_COLORS = {
    "ATTENTION": YELLOW,
    "WARNING": YELLOW,
    "ERROR": RED,
    "CRITICAL": RED,
}

# Recognized flag tokens, keyed by flag identifier
FLAG_TOKENS = {
    "help": ("-h", "--help"),
    "no-color": ("-n", "--nc", "--no-color"),
    "verbose": ("-v", "--verbose"),
    "name": ("--name",),
    "size": ("--size",),
    "download": ("--download",),
}

OMODEL_HELP = f"""\
Usage: omodel [OPTIONS] <command> [ARGS]

  Import and export the Ollama {MODELFILE_FILENAME} with ease.

  Available commands:
    list            List all Ollama models.
    export <model>  Export the {MODELFILE_FILENAME} of the given model into ./{MODELFILE_FILENAME}
    import <model>  Point ./{MODELFILE_FILENAME} at the given checkpoint and create the model
    merge <f1> <f2> Merge two GGUF files into ./{MERGED_MODEL_FILENAME}
    help            Display this help message.

  Available options:
    --name            Sort the model list by name.
    --size            Sort the model list by size (largest first).
    --download        Download the llama.cpp tools required by 'merge'.
    -n, --no-color    Disable color output.
    -v, --verbose     Enable verbose logging.
    -h, --help        Show this help message and exit.

  Environment:
    OLLAMA_USER       Your ollama.com username (required by 'import').
"""

GGUF_MERGE_HELP = f"""\
Usage: gguf-merge [OPTIONS] <GGUF_FILE1> <GGUF_FILE2>

  Allows you to merge two GGUF files into one ({MERGED_MODEL_FILENAME}).

  Available options:
    --download        Download the LLaMA.cpp tools required for processing.
    -n, --no-color    Disable color output.
    -v, --verbose     Enable verbose logging.
    -h, --help        Show this help message and exit.

  Examples:
    gguf-merge model1.gguf model2.gguf
"""


@dataclass(frozen=True)
class Invocation:
    """A parsed command line: command name, positional arguments and flags."""
    command: str
    positional_args: Tuple[str, ...]
    flags: FrozenSet[str]


@dataclass(frozen=True)
class CommandSpec:
    handler: Callable
    arg_names: Tuple[str, ...] = ()
    requires_user: bool = False


@dataclass(frozen=True)
class Tool:
    """One console tool: its name, accepted flags and usage text."""
    prog: str
    flags: Tuple[str, ...]
    help_text: str
    implied_command: Optional[str] = None


COMMANDS: Dict[str, CommandSpec] = {
    "list": CommandSpec(modelfile.cmd_list),
    "export": CommandSpec(modelfile.cmd_export, ("checkpoint",)),
    "import": CommandSpec(modelfile.cmd_import, ("checkpoint",), requires_user=True),
    "merge": CommandSpec(merge.cmd_merge, ("gguf_file1", "gguf_file2")),
}

OMODEL = Tool(
    prog="omodel",
    flags=("help", "no-color", "verbose", "name", "size", "download"),
    help_text=OMODEL_HELP,
)

GGUF_MERGE = Tool(
    prog="gguf-merge",
    flags=("help", "no-color", "verbose", "download"),
    help_text=GGUF_MERGE_HELP,
    implied_command="merge",
)


class ConsoleFormatter(logging.Formatter):
    """
    Formats log records for the terminal.

    Warnings and errors get a bracketed label ("[ERROR]"); a record may
    override the label with extra={"label": ...} and attach remediation
    hints with extra={"hints": [...]}.
    """

    def __init__(self, color=True):
        super().__init__("%(message)s")
        self.color = color

    def _c(self, code):
        return code if self.color else ""

    def format(self, record):
        message = super().format(record)
        label = getattr(record, "label", None)
        if label is None and record.levelno >= logging.WARNING:
            label = record.levelname

        if label == "ATTENTION":
            text = (f"\n{self._c(CYAN)}[{self._c(YELLOW)}{label}{self._c(CYAN)}]"
                    f"{self._c(RESET)}\n {message}")
        elif label:
            text = (f"\n{self._c(CYAN)}[{self._c(LABEL_COLORS.get(label, GREEN))}{label}"
                    f"{self._c(CYAN)}]{self._c(RESET)} {message}")
        else:
            text = message

        for hint in getattr(record, "hints", None) or []:
            text += f"\n {self._c(CYAN)}\U0001F6C8 {hint}{self._c(RESET)}"
        return text


def setup_logging(verbose=False, color=True):
    """Configure logging for the application"""
    log_level = logging.DEBUG if verbose else logging.INFO
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ConsoleFormatter(color=color and sys.stderr.isatty()))

    logger = logging.getLogger("ollama_minitools")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(log_level)
    return logger


class DispatchParser(argparse.ArgumentParser):
    """ArgumentParser that raises ArgumentError instead of exiting."""

    def error(self, message):
        raise ArgumentError(message, ["Use --help for usage."])


def build_parser(tool):
    """
    Build the argument parser for a tool.

    Every accepted flag is a boolean switch; everything else is collected,
    in order, as a plain word.
    """
    parser = DispatchParser(prog=tool.prog, add_help=False, allow_abbrev=False)
    for flag in tool.flags:
        parser.add_argument(*FLAG_TOKENS[flag], dest=flag.replace("-", "_"), action="store_true")
    parser.add_argument("words", nargs="*")
    return parser


def parse_invocation(argv, tool=OMODEL):
    """
    Parse raw process arguments into an Invocation.

    Flags are recognized regardless of position. For omodel the first
    remaining word is the command; gguf-merge has an implied command and
    every word is a positional argument. No command, a lone "help" word
    or the help flag yields the "help" command.

    Args:
        argv (list): Process arguments without the program name
        tool (Tool): The tool being run

    Returns:
        Invocation: The parsed invocation

    Raises:
        ArgumentError: On an unrecognized flag
    """
    namespace, unknown = build_parser(tool).parse_known_intermixed_args(argv)
    if unknown:
        offending = next((arg for arg in unknown if arg.startswith("-")), unknown[0])
        raise ArgumentError(f"Invalid option: \"{offending}\"", ["Use --help for usage."])

    flags = frozenset(flag for flag in tool.flags if getattr(namespace, flag.replace("-", "_")))
    words = list(getattr(namespace, "words", None) or [])

    if tool.implied_command:
        if words == ["help"]:
            command = "help"
        elif words or flags - {"no-color", "verbose"}:
            command = tool.implied_command
        else:
            command = "help"
    else:
        command = words.pop(0) if words else "help"
    if "help" in flags:
        command = "help"
    return Invocation(command=command, positional_args=tuple(words), flags=flags)


def check_arguments(invocation, command_spec):
    """Fail if the invocation does not carry exactly the arguments the command needs."""
    expected = len(command_spec.arg_names)
    given = invocation.positional_args
    if len(given) < expected:
        missing = " ".join(f"<{name}>" for name in command_spec.arg_names[len(given):])
        raise ArgumentError(
            f"Missing required argument(s) for '{invocation.command}': {missing}",
            ["Use --help for usage."],
        )
    if len(given) > expected:
        raise ArgumentError(f"Invalid argument: \"{given[expected]}\"", ["Use --help for usage."])


def check_ollama_user(settings):
    if not settings.ollama_user:
        raise ConfigurationError(
            "OLLAMA_USER environment variable is not set.",
            [
                "This variable must be defined with your ollama.com username.",
                "To set it, use the following command:",
                "  export OLLAMA_USER='your_ollama_username'",
            ],
        )


def dispatch(invocation, ctx, tool=OMODEL):
    """
    Validate an invocation and run its command handler.

    Args:
        invocation (Invocation): Parsed command line
        ctx (CommandContext): Settings, command runner and input provider
        tool (Tool): The tool being run

    Returns:
        int: Exit code
    """
    logger = logging.getLogger("ollama_minitools.cli")
    if invocation.command == "help":
        print(tool.help_text)
        return 0

    command_spec = COMMANDS.get(invocation.command)
    if command_spec is None:
        raise ArgumentError(f"Unknown command '{invocation.command}'.", ["Use --help for usage."])

    if "download" in invocation.flags:
        if invocation.command != "merge":
            raise ArgumentError("The --download option is only valid for the merge command.")
        return merge.cmd_download(invocation, ctx)

    if invocation.command != "list" and invocation.flags & {"name", "size"}:
        logger.warning("The --name and --size options only apply to the list command.")

    check_arguments(invocation, command_spec)
    if command_spec.requires_user:
        check_ollama_user(ctx.settings)
    return command_spec.handler(invocation, ctx)


def expand_short_flags(argv):
    """Split clustered short flags ('-nv' -> '-n', '-v') the way argparse reads them."""
    tokens = []
    for arg in argv:
        if arg.startswith("-") and not arg.startswith("--") and len(arg) > 2:
            tokens.extend(f"-{char}" for char in arg[1:])
        else:
            tokens.append(arg)
    return tokens


def run_tool(tool, argv=None, runner=None, prompt=None, environ=None):
    """
    Run a tool end to end and return its exit code.

    Args:
        tool (Tool): The tool to run
        argv (list, optional): Arguments (defaults to sys.argv[1:])
        runner (CommandRunner, optional): Runner for external commands
        prompt (ConsoleInput, optional): Provider of interactive answers
        environ (dict, optional): Environment (defaults to os.environ)

    Returns:
        int: Exit code
    """
    if argv is None:
        argv = sys.argv[1:]
    tokens = expand_short_flags(argv)
    no_color = any(token in FLAG_TOKENS["no-color"] for token in tokens)
    verbose = any(token in FLAG_TOKENS["verbose"] for token in tokens)
    logger = setup_logging(verbose, color=not no_color)
    logger.debug(f"{tool.prog} {__version__}")

    try:
        invocation = parse_invocation(argv, tool)
        ctx = CommandContext(
            settings=Settings.from_env(environ),
            runner=runner or CommandRunner(),
            prompt=prompt or ConsoleInput(),
        )
        return dispatch(invocation, ctx, tool)
    except FatalError as e:
        logger.error(e.message, extra={"hints": e.hints})
        return 1
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        return 1
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=verbose)
        return 1


def main(argv=None, runner=None, prompt=None, environ=None):
    """Entry point for the omodel tool."""
    return run_tool(OMODEL, argv, runner, prompt, environ)


def gguf_merge_main(argv=None, runner=None, prompt=None, environ=None):
    """Entry point for the gguf-merge tool."""
    return run_tool(GGUF_MERGE, argv, runner, prompt, environ)


if __name__ == "__main__":
    sys.exit(main())
