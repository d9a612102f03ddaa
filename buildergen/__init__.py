"""buildergen — fluent builder generation for Java data classes."""

__version__ = "0.1.0"
