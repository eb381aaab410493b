"""
Build script for formula_mass.

Install in development mode with `pip install -e .`, or with the test
dependencies via `pip install -e .[test]`.
"""
from setuptools import setup, find_packages

setup(
    name="formula-mass",
    version="0.1.0",
    description=(
        "Parse linear chemical formulae and compute molecular masses "
        "with per-element breakdowns"
    ),
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "molmass",
    ],
    extras_require={
        "dataframe": ["pandas"],
        "test": ["pytest", "pandas"],
    },
    entry_points={
        "console_scripts": [
            "formula-mass=formula_mass.__main__:main",
        ],
    },
)
