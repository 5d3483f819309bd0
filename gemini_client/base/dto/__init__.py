"""Pydantic DTOs shared across features."""

from .function_call import FunctionCallDTO
from .generation_options import GenerationOptions

__all__ = ["FunctionCallDTO", "GenerationOptions"]
