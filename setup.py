from setuptools import setup, find_packages
import os
import re

# Read version from __init__.py
with open(os.path.join("ollama_minitools", "__init__.py"), "r") as f:
    content = f.read()
    version_match = re.search(r"__version__\s*=\s*['\"]([^'\"]*)['\"]", content)
    version = version_match.group(1) if version_match else "0.0.0"

# Read long description from README
with open("README.md", "r") as f:
    long_description = f.read()

setup(
    name="ollama-minitools",
    version=version,
    author="Martin Rizzo",
    description="Simple tools to streamline the Ollama models setup process",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/martin-rizzo/OllamaMiniTools",
    packages=find_packages(),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
    ],
    python_requires=">=3.8",
    install_requires=[
        "requests>=2.31.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "flake8>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "omodel=ollama_minitools.cli:main",
            "gguf-merge=ollama_minitools.cli:gguf_merge_main",
        ],
    },
)
