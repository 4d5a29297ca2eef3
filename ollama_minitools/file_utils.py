"""
File utility functions for the Ollama Mini Tools CLI.
"""
import io
import os
import logging

from ollama_minitools.config import MODELFILE_FILENAME, MODELFILE_FROM_MARKER
from ollama_minitools.errors import PreconditionError

logger = logging.getLogger("ollama_minitools.file_utils")


def is_marker_line(line, marker=MODELFILE_FROM_MARKER):
    """
    Check whether a Modelfile line starts with the given instruction token.

    Args:
        line (str): The line, with or without its line terminator
        marker (str): The instruction token, e.g. "FROM"

    Returns:
        bool: True if the first token of the line is the marker
    """
    if not line.startswith(marker):
        return False
    rest = line[len(marker):]
    return rest == "" or rest[0].isspace()


def split_line_ending(line):
    """Split a line into its content and its terminator ('\\r\\n', '\\n', '\\r' or '')."""
    if line.endswith("\r\n"):
        return line[:-2], "\r\n"
    if line.endswith("\n") or line.endswith("\r"):
        return line[:-1], line[-1]
    return line, ""


def replace_from_line(text, checkpoint, marker=MODELFILE_FROM_MARKER):
    """
    Point the first FROM instruction of a Modelfile at a new checkpoint.

    Only the first line whose first token is the marker is rewritten; its
    line terminator is kept and every other line is left untouched.

    Args:
        text (str): The Modelfile content
        checkpoint (str): The new checkpoint identifier
        marker (str): The instruction token to look for

    Returns:
        tuple: (new_text, number_of_marker_lines_found)
    """
    lines = list(io.StringIO(text, newline=""))
    found = 0
    for index, line in enumerate(lines):
        if not is_marker_line(line, marker):
            continue
        found += 1
        if found == 1:
            _, ending = split_line_ending(line)
            lines[index] = f"{marker} {checkpoint}{ending}"
    return "".join(lines), found


class ModelfileManager:
    """
    Manages reading and writing the Modelfile in the working directory.
    """

    def __init__(self, filename=MODELFILE_FILENAME):
        self._filename = filename

    def get_modelfile_path(self, directory=None):
        """
        Get the absolute path of the Modelfile.

        Args:
            directory (str, optional): Directory holding the Modelfile
                                       (defaults to the current directory)

        Returns:
            str: The resolved absolute path
        """
        base = directory if directory else os.getcwd()
        return os.path.realpath(os.path.join(base, self._filename))

    def write_modelfile(self, content, file_path=None):
        """
        Write (overwrite) the Modelfile with the given content.

        Args:
            content (str): Modelfile text
            file_path (str, optional): Target path (defaults to ./Modelfile)

        Returns:
            str: The path that was written
        """
        output_path = file_path if file_path else self.get_modelfile_path()
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        logger.debug(f"Wrote {len(content)} characters to {output_path}")
        return output_path

    def set_checkpoint(self, checkpoint, file_path=None):
        """
        Rewrite the FROM line of an existing Modelfile in place.

        Args:
            checkpoint (str): The checkpoint the Modelfile should be built from
            file_path (str, optional): Modelfile path (defaults to ./Modelfile)

        Returns:
            str: The resolved path of the modified Modelfile

        Raises:
            PreconditionError: If the file is missing or has no FROM line
        """
        modelfile = os.path.realpath(file_path) if file_path else self.get_modelfile_path()
        if not os.path.isfile(modelfile):
            raise PreconditionError(
                f"Modelfile \"{modelfile}\" does not exist.",
                ["Use the 'export' command to create it from an existing model."],
            )

        with open(modelfile, "r", encoding="utf-8", newline="") as f:
            content = f.read()

        new_content, found = replace_from_line(content, checkpoint)
        if found == 0:
            raise PreconditionError(
                f"Modelfile \"{modelfile}\" has no {MODELFILE_FROM_MARKER} line.",
            )
        if found > 1:
            logger.warning(
                f"Modelfile has {found} {MODELFILE_FROM_MARKER} lines, only the first one was replaced."
            )

        with open(modelfile, "w", encoding="utf-8", newline="") as f:
            f.write(new_content)
        return modelfile
