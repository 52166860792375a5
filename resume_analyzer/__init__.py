"""Resume Analyzer - normalized, merged resume analysis from LLM providers."""

__version__ = "0.1.0"
