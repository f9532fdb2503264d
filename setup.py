# Copyright 2012-2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Setuptools installer for the PXE loader engine."""

from os.path import dirname, join

from setuptools import find_packages, setup


def read(filename):
    """Return the whitespace-stripped content of `filename`."""
    path = join(dirname(__file__), filename)
    with open(path, "r") as fin:
        return fin.read().strip()


setup(
    name="pxeloader",
    version="1.0.0",
    license="AGPLv3",
    description="PXE loader resolution and preference",
    long_description=read("README.rst"),
    long_description_content_type="text/x-rst",
    packages=find_packages(
        where="src",
        exclude=["*.testing", "*.tests", "pxetesting", "pxetesting.*"],
    ),
    package_dir={"": "src"},
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "formencode",
        "PyYAML",
    ],
    extras_require={
        "test": [
            "fixtures",
            "pytest",
            "testscenarios",
            "testtools",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Information Technology",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: GNU Affero General Public License v3",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Topic :: System :: Systems Administration",
    ],
)
