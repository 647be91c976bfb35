"""A setuptools based setup module.

See:
https://packaging.python.org/en/latest/distributing.html
https://github.com/pypa/sampleproject
"""
import os

from setuptools import find_packages, setup

# pylint: disable=redefined-builtin

here = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(here, "README.rst"), encoding="utf-8") as fid:
    long_description = fid.read()

setup(
    name="inheritance-idioms",
    version="0.1.0",
    description="Demonstrate classic inheritance idioms of prototype-based object models.",
    long_description=long_description,
    author="Marko Ristin, Nico Braunisch, Robert Lehmann",
    author_email="marko@ristin.ch",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    license="License :: OSI Approved :: MIT License",
    keywords="inheritance prototype object model mixin education",
    packages=find_packages(exclude=["tests", "continuous_integration"]),
    install_requires=[
        "icontract>=2.6.1,<3",
        "sortedcontainers>=2.4.0,<3",
    ],
    extras_require={
        "dev": [
            "black==24.3.0",
            "mypy==1.9.0",
            "pylint==3.1.0",
            "coverage>=6.5.0,<8",
        ],
    },
    package_data={"inheritance_idioms": ["py.typed"]},
    entry_points={
        "console_scripts": [
            "inheritance-idioms=inheritance_idioms.main:entry_point",
        ]
    },
)
