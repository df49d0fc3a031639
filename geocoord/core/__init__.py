"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants (bounds, glyphs, datum, unit conversions)
- exceptions: Custom exception hierarchy
"""
