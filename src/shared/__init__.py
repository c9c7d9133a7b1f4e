"""
Shared Kernel Module
====================

Shared infrastructure used by every bounded context (currently only users):
structured logging and the API middleware / error envelope.

DO NOT add user business logic to the shared kernel.
"""

__version__ = "1.0.0"
