"""Schema text generation."""

from .prisma import generate_schema, generate_model

__all__ = ["generate_schema", "generate_model"]
