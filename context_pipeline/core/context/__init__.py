"""
Context assembly.

Exports: build_context_string, NO_CONTEXT_AVAILABLE
"""

from .assembler import DEFAULT_MAX_LENGTH, NO_CONTEXT_AVAILABLE, build_context_string, format_result_block

__all__ = ["DEFAULT_MAX_LENGTH", "NO_CONTEXT_AVAILABLE", "build_context_string", "format_result_block"]
