"""
Setup script for aliasdraw package.
"""
from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="aliasdraw",
    version="0.1.0",
    description="Weighted random selection over mutable collections using the alias method",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="aliasdraw Team",
    packages=find_packages(include=["aliasdraw", "aliasdraw.*"]),
    install_requires=[
        "numpy>=1.25.0",
        "scipy>=1.10.0",
        "rich>=13.0.0",
        "psutil>=5.9.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "aliasdraw-fit=aliasdraw.cli:main",
        ],
    },
    python_requires=">=3.9",
)
