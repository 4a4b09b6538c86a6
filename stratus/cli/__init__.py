# Copyright Stratus Labs 2026
"""
The `stratus.cli` package contains the Python implementations for the Stratus CLI.

The functions defined in this package are intended to be called via the CLI,
not from Python code. No backwards compatibility guarantees are made with
respect to Python calling patterns.
"""
