# setup.py
from setuptools import setup, find_packages

setup(
    name="itl",
    version="0.1.0",
    description="Tree-walking interpreter for the ITL scripting language",
    packages=find_packages(include=["itl", "itl.*", "itl_lsp", "itl_lsp.*"]),
    package_data={"itl": ["prelude/*.itl"]},
    python_requires=">=3.10",
    install_requires=[
        "termcolor>=2.1",
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "hypothesis>=6",
        ],
    },
    entry_points={
        "console_scripts": [
            "itl=itl.cli:main",
            "itl-ls=itl_lsp.server:main",
        ],
    },
    zip_safe=False,
)
