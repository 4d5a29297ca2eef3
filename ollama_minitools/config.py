"""
Configuration management for the Ollama Mini Tools CLI.
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ollama_minitools.errors import ConfigurationError

# Default filenames
MODELFILE_FILENAME = "Modelfile"
MERGED_MODEL_FILENAME = "merged-model.gguf"
MODELFILE_FROM_MARKER = "FROM"

# Pinned llama.cpp release that provides llama-gguf-split
LLAMA_CPP_VERSION = "b6811"
LLAMA_CPP_ZIP_URL = (
    "https://github.com/ggml-org/llama.cpp/releases/download/"
    "{version}/llama-{version}-bin-ubuntu-x64.zip"
)
GGUF_SPLIT_COMMAND = "llama-gguf-split"

# Directory layout
DATA_DIR_NAME = "OllamaMiniTools"
LLAMA_CPP_BIN_DIR_NAME = "llamacpp-bin"

# Defaults offered by the import prompts
DEFAULT_MODEL_NAME = "Llama3"
DEFAULT_MODEL_TAG = "7b-q4_K_M"

DEFAULT_OLLAMA_BIN = "ollama"
DEFAULT_DOWNLOAD_TIMEOUT = 1200


def default_data_dir(environ: Mapping[str, str]) -> str:
    """
    Resolve the base data directory following the XDG base directory layout.

    Args:
        environ: Environment mapping to read from

    Returns:
        str: Absolute path of the OllamaMiniTools data directory
    """
    xdg_data_home = environ.get("XDG_DATA_HOME") or os.path.join(
        os.path.expanduser("~"), ".local", "share"
    )
    return os.path.join(xdg_data_home, DATA_DIR_NAME)


def parse_timeout(value):
    """Parse OLLAMA_MINITOOLS_TIMEOUT; unset or empty means the default."""
    if not value:
        return DEFAULT_DOWNLOAD_TIMEOUT
    try:
        timeout = int(value)
    except ValueError:
        timeout = 0
    if timeout <= 0:
        raise ConfigurationError(
            f"OLLAMA_MINITOOLS_TIMEOUT must be a positive number of seconds, got '{value}'.",
            ["To use the default, unset it:", "  unset OLLAMA_MINITOOLS_TIMEOUT"],
        )
    return timeout


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, resolved once at startup."""
    ollama_user: Optional[str]
    ollama_bin: str
    data_dir: str
    llama_cpp_bin_dir: str
    download_timeout: int = DEFAULT_DOWNLOAD_TIMEOUT
    llama_cpp_version: str = LLAMA_CPP_VERSION

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build the settings from environment variables.

        Recognized variables:
            OLLAMA_USER                 ollama.com username used by `import`
            OLLAMA_BIN                  ollama executable (default: ollama)
            OLLAMA_MINITOOLS_DATA_DIR   base data directory
            OLLAMA_MINITOOLS_BIN_DIR    directory holding the llama.cpp binaries
            OLLAMA_MINITOOLS_TIMEOUT    download timeout in seconds
        """
        if environ is None:
            environ = os.environ
        data_dir = environ.get("OLLAMA_MINITOOLS_DATA_DIR") or default_data_dir(environ)
        bin_dir = environ.get("OLLAMA_MINITOOLS_BIN_DIR") or os.path.join(
            data_dir, LLAMA_CPP_BIN_DIR_NAME
        )
        return cls(
            ollama_user=environ.get("OLLAMA_USER") or None,
            ollama_bin=environ.get("OLLAMA_BIN") or DEFAULT_OLLAMA_BIN,
            data_dir=data_dir,
            llama_cpp_bin_dir=bin_dir,
            download_timeout=parse_timeout(environ.get("OLLAMA_MINITOOLS_TIMEOUT")),
        )

    @property
    def gguf_split_cmd(self) -> str:
        return os.path.join(self.llama_cpp_bin_dir, GGUF_SPLIT_COMMAND)

    @property
    def llama_cpp_zip_url(self) -> str:
        return LLAMA_CPP_ZIP_URL.format(version=self.llama_cpp_version)
