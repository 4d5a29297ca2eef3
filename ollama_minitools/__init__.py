"""
Ollama Mini Tools - Simple tools to streamline the Ollama models setup process.

This package wraps the `ollama` and `llama-gguf-split` executables with two
small command line tools.

Commands:
    omodel list            - List installed models (optionally --name/--size sorted)
    omodel export <model>  - Export the Modelfile of a model to ./Modelfile
    omodel import <model>  - Point ./Modelfile at a checkpoint and create a model
    gguf-merge <f1> <f2>   - Merge two GGUF files into ./merged-model.gguf
    gguf-merge --download  - Download the llama.cpp tools used by gguf-merge
"""

__version__ = "1.0.0"
__author__ = "Martin Rizzo"
__license__ = "MIT"
__url__ = "https://github.com/martin-rizzo/OllamaMiniTools"
