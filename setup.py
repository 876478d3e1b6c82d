"""
Setup script for sentinel-watch.

For development:
    pip install -e ".[test]"
"""

from setuptools import find_packages, setup

setup(
    name="sentinel-watch",
    version="0.1.0",
    description="Weekly sentinel surveillance CSV extraction pipeline",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pandas>=2.0",
        "python-dotenv>=1.0",
        "requests>=2.31",
        "urllib3>=2.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "sentinel-watch=sentinel_watch.main:main",
        ],
    },
)
