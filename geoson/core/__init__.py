"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: CRS vocabulary, GeoJSON type names, header rules
- exceptions: Custom exception hierarchy
"""
