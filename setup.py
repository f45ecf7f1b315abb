#!/usr/bin/env python3
"""
Setup configuration for the PDF Page Numbering Tool
"""

from setuptools import setup

VERSION = "1.0.0"

# Read long description from README
try:
    with open("README.md", "r", encoding="utf-8") as fh:
        LONG_DESCRIPTION = fh.read()
except FileNotFoundError:
    LONG_DESCRIPTION = """
    PDF Page Numbering Tool

    Stamp page numbers onto PDF documents with start page, custom range,
    skip lists, position presets and mirrored gutters for book layouts.
    Includes a page preview renderer, a command line tool and an HTTP API.
    """

# Top-level modules living in src/
PY_MODULES = [
    "config",
    "error_handling",
    "logger_manager",
    "main",
    "numbering_policy",
    "numbering_settings",
    "pdf_document",
    "position_calculator",
    "preview_renderer",
    "preview_state",
    "server",
    "skip_pattern",
    "stamping_engine",
    "unit_converter",
]

ENTRY_POINTS = {
    "console_scripts": [
        "pdf-numbering=main:main",
    ],
}

setup(
    name="pdf-page-numbering",
    version=VERSION,
    description="Add page numbers to PDF documents",
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",

    # Package configuration
    package_dir={"": "src"},
    py_modules=PY_MODULES,

    # Python version requirement
    python_requires=">=3.9",

    install_requires=[
        "PyMuPDF>=1.24.0",
        "PyPDF2>=3.0.1",
        "reportlab>=4.1.0",
        "pillow>=10.4.0",
        "fastapi>=0.110.0",
        "uvicorn>=0.29.0",
        "python-multipart>=0.0.9",
    ],

    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "httpx>=0.27.0",
        ],
    },

    entry_points=ENTRY_POINTS,

    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Office/Business",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: OS Independent",
    ],

    keywords="pdf page numbering gutter book layout stamping",

    zip_safe=False,
)
