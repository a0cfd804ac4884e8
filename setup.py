#!/usr/bin/env python3
"""
Setup configuration for the Asset Compression Pipeline.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the contents of README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

# Read requirements from requirements.txt
requirements = []
if (this_directory / "requirements.txt").exists():
    requirements = (this_directory / "requirements.txt").read_text().strip().split('\n')
    requirements = [req.strip() for req in requirements if req.strip() and not req.startswith('#')]

setup(
    name="asset-compression-pipeline",
    version="1.0.0",
    author="Project Think",
    author_email="",
    description="Post-build step that precompresses static assets with Brotli or Gzip",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=['encoders*', 'pipeline*']),
    py_modules=[
        'asset_compression_pipeline',
        'base_classes',
        'build_hooks',
        'compress',
        'pipeline_configs',
        'pipeline_errors',
        'pipeline_monitoring',
        'run_tests',
    ],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Build Tools",
        "Topic :: System :: Archiving :: Compression",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
        ],
        "test": [
            "pytest>=6.0",
            "pytest-cov",
        ],
    },
    entry_points={
        "console_scripts": [
            "asset-compress=compress:cli",
            "run-pipeline-tests=run_tests:main",
        ],
    },
    keywords=[
        "brotli",
        "gzip",
        "precompression",
        "static-assets",
        "build-tools",
    ],
)
