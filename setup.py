"""Setup configuration for timeline-segmenter."""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="timeline-segmenter",
    version="1.0.0",
    author="Your Name",
    author_email="your.email@example.com",
    description="Edit contiguous segment partitions of daily time windows",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/timeline-segmenter",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Office/Business :: Scheduling",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=[
        # No external dependencies required
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "black>=22.0",
            "flake8>=5.0",
            "mypy>=1.0",
            "pre-commit>=3.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "timeline-segmenter=timeline_segmenter.cli:main",
        ],
    },
    project_urls={
        "Bug Reports": "https://github.com/yourusername/timeline-segmenter/issues",
        "Source": "https://github.com/yourusername/timeline-segmenter",
    },
)
