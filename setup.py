# setup.py
"""Minimal setup for chatreader."""

from setuptools import setup, find_packages

setup(
    name="chatreader",
    version="0.1.0",
    description="Extract and tag AI chat transcripts from editor state backups",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"chatreader": ["templates/*.jinja"]},
    python_requires=">=3.8",
    install_requires=[
        "loguru",
        "jinja2",
        "python-frontmatter",
        "genson",
        "nltk",
    ],
    extras_require={
        "dev": ["pytest>=6.0"]
    },
    entry_points={
        'console_scripts': [
            'chatreader=chatreader.cli.console:console_main',
        ],
    },
)
