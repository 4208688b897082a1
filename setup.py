"""Setup configuration for the jigsaw-counter package."""

from setuptools import find_packages, setup

setup(
    name="jigsaw-counter",
    version="0.1.0",
    packages=find_packages(include=["jigsaw_counter", "jigsaw_counter.*"]),
    install_requires=[
        "numpy",
        "pydantic",
        "pydantic-settings",
        "tqdm",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
            "isort",
        ],
    },
    entry_points={
        "console_scripts": [
            "jigsaw-counter=jigsaw_counter.cli:main",
        ],
    },
)
