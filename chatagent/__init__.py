"""Chat and step-by-step agent backend over a hosted language model."""

__version__ = "0.1.0"
