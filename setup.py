"""
Coverage Layer Core
===================

Data-subsetting and cross-layer parameter reconciliation for interactive
display of multi-dimensional scientific coverage data.
"""

from setuptools import setup, find_packages

setup(
    name="covlayer",
    version="0.4.0",
    author="covlayer developers",
    description="Coverage subsetting and parameter reconciliation for map layers",
    long_description=__doc__,
    long_description_content_type="text/plain",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: GIS",
        "Topic :: Scientific/Engineering :: Atmospheric Science",
    ],
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20.0",
        "xarray>=0.20.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
        "test": [
            "pytest>=7.0.0",
        ],
    },
)
