"""
Package version.

Read by the build backend; bump on release.
"""

__version__ = "0.1.0"
