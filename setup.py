# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from setuptools import setup, find_packages

setup(
    name="rustsmith",
    version="0.1.0",
    description="Capability-composed Rust test module planning: variants, flags, install paths and harness configs",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["rustsmith", "rustsmith.*"]),
    package_data={
        "rustsmith.harness": ["templates/*.xml"],
    },
    install_requires=[
        "click>=8.1",
        "jinja2>=3.1",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "pyyaml>=6.0",
        "rich>=13.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Programming Language :: Python",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
    ],
    license="MIT",
    entry_points={
        'console_scripts': [
            'rustsmith=rustsmith.cli.cli:main',
        ],
    },
    python_requires=">=3.10",
)
