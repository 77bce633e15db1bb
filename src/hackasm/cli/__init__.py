"""
hackasm Command-Line Interface
==============================

- **hackasm**: Hack assembler (``.asm`` to ``.hack``)

Implemented as a Click-based CLI application with help text and
consistent exit codes (see ``hackasm.cli.errors``).
"""

__all__ = ["hackasm"]
