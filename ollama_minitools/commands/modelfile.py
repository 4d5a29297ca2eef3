"""
Modelfile commands for the omodel CLI: list, export and import.
"""
import sys
import logging

from ollama_minitools.config import DEFAULT_MODEL_NAME, DEFAULT_MODEL_TAG
from ollama_minitools.core.listing import SORT_BY_NAME, SORT_BY_SIZE, reorder_listing
from ollama_minitools.errors import ArgumentError
from ollama_minitools.file_utils import ModelfileManager

logger = logging.getLogger("ollama_minitools.modelfile")
file_manager = ModelfileManager()


def get_sort_key(flags):
    """
    Translate the --name/--size flags into a sort key.

    Args:
        flags (frozenset): Flags of the invocation

    Returns:
        str: SORT_BY_NAME, SORT_BY_SIZE or None
    """
    if SORT_BY_NAME in flags and SORT_BY_SIZE in flags:
        raise ArgumentError(
            "The --name and --size options are mutually exclusive.",
            ["Use --help for usage."],
        )
    if SORT_BY_NAME in flags:
        return SORT_BY_NAME
    if SORT_BY_SIZE in flags:
        return SORT_BY_SIZE
    return None


def cmd_list(invocation, ctx):
    """
    List the installed Ollama models, optionally sorted by name or size.

    Args:
        invocation: Parsed invocation
        ctx: Command context

    Returns:
        int: Exit code
    """
    sort_by = get_sort_key(invocation.flags)
    if sort_by is None:
        return ctx.runner.run(ctx.settings.ollama_bin, ["list"]).returncode

    result = ctx.runner.run(ctx.settings.ollama_bin, ["list"], capture=True)
    if result.returncode != 0:
        if result.output:
            sys.stdout.write(result.output)
        return result.returncode

    for line in reorder_listing(result.output or "", sort_by):
        print(line)
    return 0


def cmd_export(invocation, ctx):
    """
    Export the Modelfile of a model into ./Modelfile.

    Args:
        invocation: Parsed invocation; the only positional argument is the checkpoint
        ctx: Command context

    Returns:
        int: Exit code of `ollama show`
    """
    checkpoint = invocation.positional_args[0]
    logger.info(f"Exporting Modelfile for '{checkpoint}'")

    result = ctx.runner.run(
        ctx.settings.ollama_bin, ["show", "--modelfile", checkpoint], capture=True
    )
    if result.returncode != 0:
        logger.error(f"ollama show failed for '{checkpoint}' (exit code {result.returncode})")
        return result.returncode

    modelfile = file_manager.write_modelfile(result.output or "")
    logger.info(f"Created file {modelfile}")
    return 0


def cmd_import(invocation, ctx):
    """
    Point ./Modelfile at a checkpoint and create a model from it.

    The FROM line of the Modelfile is replaced, then the user is asked for
    the model name and tag used to publish it under OLLAMA_USER.

    Args:
        invocation: Parsed invocation; the only positional argument is the checkpoint
        ctx: Command context

    Returns:
        int: Exit code of `ollama create`
    """
    checkpoint = invocation.positional_args[0]
    logger.info(f"Pointing Modelfile to '{checkpoint}'")
    modelfile = file_manager.set_checkpoint(checkpoint)

    model_name = ctx.prompt.ask("Enter the model name", DEFAULT_MODEL_NAME)
    model_tag = ctx.prompt.ask("Enter the model tag", DEFAULT_MODEL_TAG)
    target = f"{ctx.settings.ollama_user}/{model_name}:{model_tag}"

    logger.info(f"OLLAMA_USER: {ctx.settings.ollama_user}")
    logger.info(f"MODEL_NAME : {model_name}")
    logger.info(f"MODEL_TAG  : {model_tag}")
    logger.info(f"Modelfile  : {modelfile}")
    logger.info(f"> {ctx.settings.ollama_bin} create -f '{modelfile}' '{target}'")

    return ctx.runner.run(ctx.settings.ollama_bin, ["create", "-f", modelfile, target]).returncode
