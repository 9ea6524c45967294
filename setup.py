#!/usr/bin/env python3
import os.path

from setuptools import setup, find_packages

here = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(here, "README.rst"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="qmldata",
    version="0.1.0",
    description="List models for QML and Qt item views.",
    long_description=long_description,
    license="GPL",
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: "
        "GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Software Development :: User Interfaces",
    ],
    keywords="qt qml list model",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "aioxmpp>=0.10",
    ],
    extras_require={
        "qt": [
            "PyQt5",
        ],
        "test": [
            "PyQt5",
            "pytest",
        ],
    },
)
