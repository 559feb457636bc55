"""
Setup script for the bb-engine package.

Installs the ``bb_engine`` package from ``src/`` and the ``bb-engine``
console script.
"""

from setuptools import setup, find_packages

setup(
    name="bb-engine",
    version="1.0.0",
    description="Deterministic phase engine for elimination-competition game seasons",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "bb-engine=bb_engine.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
