# -*- coding: utf-8 -*-

from setuptools import setup

extras_require = {
    "test": [
        "pytest-cov>=2.10,<5.0",
        "pytest-instafail>=0.4,<1.0",
        "pytest-xdist>=2.5,<4.0",
        "eth-tester[py-evm]>=0.9.0b1,<0.10",
        "py-evm>=0.7.0a1,<0.8",
        "hypothesis>=5.37.1,<7.0",
        "vyper>=0.4.0,<0.5",
    ],
    "lint": [
        "black==23.12.0",
        "flake8==6.1.0",
        "flake8-bugbear==23.12.2",
        "flake8-use-fstring==1.4",
        "isort==5.13.2",
        "mypy==1.5",
    ],
    "dev": ["ipython", "pre-commit", "twine"],
}

extras_require["dev"] = extras_require["test"] + extras_require["lint"] + extras_require["dev"]

with open("README.md", "r") as f:
    long_description = f.read()


setup(
    name="erc20-conformance",
    version="0.1.0",
    description="Reusable conformance test suite for ERC-20 token implementations",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="",
    author_email="",
    license="Apache License 2.0",
    keywords="ethereum erc20 token conformance testing",
    include_package_data=True,
    packages=["erc20_conformance", "erc20_conformance.scenarios"],
    python_requires=">=3.10,<4",
    install_requires=["pytest>=6.2.5", "web3>=6.0.0,<7", "importlib-metadata", "wheel"],
    tests_require=extras_require["test"],
    extras_require=extras_require,
    classifiers=[
        "Intended Audience :: Developers",
        "Framework :: Pytest",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
