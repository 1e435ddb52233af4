#!/usr/bin/env python

"""The setup script."""

from __future__ import annotations

from setuptools import find_packages, setup

with open("README.rst", encoding="utf-8") as readme_file:
    readme = readme_file.read()

with open("HISTORY.rst", encoding="utf-8") as history_file:
    history = history_file.read()

requirements: list[str] = [
    "aiohttp>=3.8.1",
    "click>=8.0.1",
    "graphql-core>=3.1.5",
    "PyYAML>=5.4.1",
    "requests>=2.25.1",
]

requirements_test = [
    "pytest>=6.2.4",
    "pytest-cov>=2.11.1",
]

requirements_dev = [
    "black>=21.5b0",
    "bump2version>=1.0.1",
    "coverage>=5.5",
    "flake8>=3.9.1",
    "isort>=5.8.0",
    "mypy>=0.812",
    "pre-commit>=2.12.1",
    "pylint>=2.8.2",
    "pytest-xdist>=2.2.1",
    "strawberry-graphql>=0.84.4",
    "types-PyYAML>=5.4.3",
    "types-requests>=2.25.0",
]

requirements_docs = [
    "Sphinx>=3.5.4",
    "sphinx-autoapi>=1.8.1",
]

requirements_dev += requirements_test + requirements_docs

setup(
    author="Shogo Sawai",
    author_email="shogo.sawai+graphqlclient@gmail.com",
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
    ],
    description="Low level python graphql client",  # noqa: E501
    entry_points={
        "console_scripts": [
            "python-graphql-client=python_graphql_client.cli:main",
        ],
    },
    install_requires=requirements,
    extras_require={
        "dev": requirements_dev,
        "docs": requirements_docs,
        "test": requirements_test,
    },
    license="MIT",
    long_description=readme + "\n\n" + history,
    name="python_graphql_client",
    packages=find_packages(include=["python_graphql_client", "python_graphql_client.*"]),
    include_package_data=True,
    test_suite="tests",
    url="https://github.com/s1s5/python-graphql-client",
    version="0.1.0",
    zip_safe=False,
)
