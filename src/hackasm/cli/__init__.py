"""
hackasm Command-Line Interface
==============================

This package provides the ``hackasm`` command-line tool, a Click-based
front end to the Hack assembler with error reporting and exit codes.
"""

__all__ = ["hackasm"]
