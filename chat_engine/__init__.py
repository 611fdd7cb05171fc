"""Retrieval-augmented chat engine over extracted PDF chunks."""

__version__ = "0.1.0"
