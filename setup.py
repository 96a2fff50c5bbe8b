"""Pocket Calc - Keyboard-driven Calculator."""
from setuptools import setup, find_packages

setup(
    name="pocket-calc",
    version="1.0.0",
    description="Keyboard-driven two-operand calculator with persisted history",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click>=8.1.0",
        "rich>=13.0.0",
        "questionary>=2.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "pocket-calc=pocket_calc.cli:main",
        ],
    },
    python_requires=">=3.10",
)
