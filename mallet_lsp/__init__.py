"""Mallet Language Server package.

This package provides:
- A pygls-based Language Server for the Mallet Lisp dialect.
- An indexer that runs the Mallet reader over a document, without evaluating
  it, to find reader errors and top-level `def!` names.
"""

__all__ = [
    "server",
    "indexer",
]
