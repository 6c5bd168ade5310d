from __future__ import annotations

import os

from setuptools import find_packages, setup


def read_version() -> str:
    """Read the version number, preferring the environment variable."""
    env_version = os.getenv("PKG_VERSION", "").strip()
    if env_version:
        return env_version.lstrip("v")
    return "0.0.1"


setup(
    name="dense-bitmap",
    version=read_version(),
    description="Fixed-capacity dense bitmap with range operations and set algebra.",
    long_description="Fixed-capacity dense bitmap with range operations and set algebra.",
    long_description_content_type="text/plain",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
)
