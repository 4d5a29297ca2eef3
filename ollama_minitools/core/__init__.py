"""
Core functionality modules for the ollama-minitools package.
These modules hold the logic that is not delegated to ollama or llama.cpp.
"""

from ollama_minitools.core.listing import reorder_listing
from ollama_minitools.core.llamacpp import download_llama_cpp_tools
