"""
GGUF merge commands: merge two GGUF files, or download the tool that does it.
"""
import os
import logging

from ollama_minitools.config import MERGED_MODEL_FILENAME
from ollama_minitools.core.llamacpp import download_llama_cpp_tools
from ollama_minitools.errors import PreconditionError

logger = logging.getLogger("ollama_minitools.merge")


def cmd_merge(invocation, ctx):
    """
    Merge two GGUF files into ./merged-model.gguf with llama-gguf-split.

    Args:
        invocation: Parsed invocation; the positional arguments are the two GGUF files
        ctx: Command context

    Returns:
        int: Exit code of llama-gguf-split
    """
    gguf_split = ctx.settings.gguf_split_cmd
    if not os.path.isfile(gguf_split):
        raise PreconditionError(
            "The gguf-split command has not been downloaded.",
            ["Use --download to install the necessary tools or use --help for more information."],
        )

    gguf_file1, gguf_file2 = invocation.positional_args
    for gguf_file in (gguf_file1, gguf_file2):
        if not os.path.isfile(gguf_file):
            raise PreconditionError(f"GGUF file \"{gguf_file}\" does not exist.")

    logger.info(
        f">{os.path.basename(gguf_split)} --merge '{gguf_file1}' '{gguf_file2}' {MERGED_MODEL_FILENAME}"
    )
    return ctx.runner.run(
        gguf_split, ["--merge", gguf_file1, gguf_file2, MERGED_MODEL_FILENAME]
    ).returncode


def cmd_download(invocation, ctx):
    """
    Download the llama.cpp tools required by the merge command.

    Returns:
        int: Always 0; cancelling the download is not an error
    """
    download_llama_cpp_tools(ctx.settings, ctx.prompt)
    return 0
