from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="univ3-lp",
    version="0.1.0",
    description="Mint Uniswap V3 concentrated-liquidity positions around the current pool price",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["univ3_lp", "univ3_lp.*"]),
    package_data={
        "univ3_lp": ["abis.json", "addresses.json", "defaults/*.json"],
    },
    python_requires=">=3.8",
    install_requires=[
        "web3>=7.0.0",
        "python-dotenv>=1.0.0",
        "eth-account>=0.13.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "univ3-lp=univ3_lp.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
