# setup.py
from setuptools import setup, find_packages

setup(
    name="mallet",
    version="0.4.0",
    description="A small Lisp reader and evaluator with a line REPL and language server",
    packages=find_packages(include=["mallet", "mallet.*", "mallet_lsp", "mallet_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "mallet=mallet.repl:main",
            "mallet-ls=mallet_lsp.server:main",
        ],
    },
    zip_safe=False,
)
