"""
Setup script for macfluid package.
"""

from setuptools import setup, find_packages

setup(
    name="macfluid",
    version="0.1.0",
    description="Pressure projection fluid solver on a staggered 2D grid",
    author="Andrey",
    packages=find_packages(include=["macfluid", "macfluid.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20",
        "numba>=0.56",
    ],
    extras_require={
        "test": ["pytest>=7.0", "scipy>=1.7"],
        "dev": ["pytest>=7.0", "scipy>=1.7", "black", "flake8"],
    },
)
