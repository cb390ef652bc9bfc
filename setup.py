#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages

from persistconf.version import __version__

with open("requirements.txt") as f:
    install_requires = [x for x in f.read().split("\n") if x]

with open("README.md") as f:
    long_description = f.read()

setup(
    name="persistconf",
    version=__version__,
    description="Validation and defaulting of persistence configuration for sql and cassandra datastores.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["contrib", "docs", "tests*"]),
    include_package_data=True,
    install_requires=install_requires,
    extras_require={"test": ["pytest"]},
    license="Apache License 2.0",
    python_requires=">=3.10",
    zip_safe=False,
    keywords=["persistence", "cassandra", "sql", "configuration"],
    entry_points={"console_scripts": ["persistconf = persistconf.__main__:main"]},
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Natural Language :: English",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Database",
    ],
)
