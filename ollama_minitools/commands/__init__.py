"""
Command handlers for the omodel and gguf-merge tools.

Each handler takes the parsed invocation and a CommandContext and returns
the process exit code.
"""
