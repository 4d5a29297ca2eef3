"""
Download and installation of the llama.cpp tools used to merge GGUF files.
"""
import os
import shutil
import logging
import zipfile

import requests

from ollama_minitools.errors import DelegationError, PreconditionError
from ollama_minitools.utils import confirm

logger = logging.getLogger("ollama_minitools.core.llamacpp")

DOWNLOAD_CHUNK_SIZE = 1024 * 1024


def remove_partial(path):
    if os.path.exists(path):
        os.remove(path)


def download_file(url, output_path, timeout):
    """
    Stream a remote file to disk.

    Args:
        url (str): Remote URL
        output_path (str): Local destination
        timeout (int): Request timeout in seconds

    Raises:
        DelegationError: If the download fails
    """
    logger.info(f"Downloading {url}")
    try:
        with requests.get(url, stream=True, timeout=timeout) as resp:
            resp.raise_for_status()
            with open(output_path, "wb") as f:
                for chunk in resp.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
    except requests.RequestException as e:
        remove_partial(output_path)
        raise DelegationError(
            f"Failed to download {url}: {e}",
            ["Check your internet connection and try again."],
        )
    except OSError as e:
        remove_partial(output_path)
        raise DelegationError(f"Failed to write {output_path}: {e}")
    except KeyboardInterrupt:
        remove_partial(output_path)
        raise


def extract_zip(zip_path, target_dir):
    """
    Extract a zip archive, restoring the Unix permission bits it records.

    Args:
        zip_path (str): Archive to extract
        target_dir (str): Destination directory

    Raises:
        DelegationError: If the archive cannot be read
    """
    try:
        with zipfile.ZipFile(zip_path) as archive:
            for info in archive.infolist():
                extracted = archive.extract(info, target_dir)
                mode = (info.external_attr >> 16) & 0o777
                if mode and not info.is_dir():
                    os.chmod(extracted, mode)
    except (zipfile.BadZipFile, OSError) as e:
        raise DelegationError(f"Failed to extract the llama.cpp tools into {target_dir}: {e}")


def flatten_build_dir(bin_dir):
    """Move everything in <bin_dir>/build/bin up to <bin_dir> and drop build/."""
    build_dir = os.path.join(bin_dir, "build")
    build_bin_dir = os.path.join(build_dir, "bin")
    if not os.path.isdir(build_bin_dir):
        logger.warning(f"No build/bin directory found in {bin_dir}")
        return
    for name in os.listdir(build_bin_dir):
        shutil.move(os.path.join(build_bin_dir, name), os.path.join(bin_dir, name))
    shutil.rmtree(build_dir)


def download_llama_cpp_tools(settings, prompt):
    """
    Download the pinned llama.cpp release into the configured binaries directory.

    The user is asked for confirmation first. An existing binaries directory
    is replaced.

    Args:
        settings (Settings): Resolved configuration
        prompt: Input provider used for the confirmation

    Returns:
        bool: True if the tools were installed, False if the user cancelled
    """
    bin_dir = settings.llama_cpp_bin_dir
    if not bin_dir:
        raise PreconditionError("The directory for the llama.cpp tools is not set.")

    logger.warning(
        f"The llama.cpp tools will be downloaded into the directory:\n  > {bin_dir}\n\n"
        "These are required for processing the GGUF files.",
        extra={"label": "ATTENTION"},
    )
    if not confirm(prompt, "Proceed? (y/n)"):
        print("Download cancelled.")
        return False

    if os.path.exists(bin_dir):
        logger.info(f"Removing the old directory: {bin_dir}")
        shutil.rmtree(bin_dir)
    logger.info(f"Creating directory: {bin_dir}")
    os.makedirs(bin_dir)

    url = settings.llama_cpp_zip_url
    zip_path = os.path.join(settings.data_dir, os.path.basename(url))
    os.makedirs(settings.data_dir, exist_ok=True)
    if not os.path.exists(zip_path):
        download_file(url, zip_path, settings.download_timeout)

    logger.info(f"Extracting {os.path.basename(zip_path)}")
    try:
        extract_zip(zip_path, bin_dir)
    except DelegationError:
        # the cached archive is only kept while it is extractable
        remove_partial(zip_path)
        raise
    flatten_build_dir(bin_dir)
    os.remove(zip_path)

    logger.info(f"llama.cpp {settings.llama_cpp_version} tools installed in {bin_dir}")
    return True
