"""
Mano Assembler Command-Line Interface
=====================================

- **manoasm**: basic computer assembler

The tool is a Click-based CLI application with help and error reporting.
"""

__all__ = ["manoasm"]
