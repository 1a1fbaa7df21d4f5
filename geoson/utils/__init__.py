"""Shared helpers.

- transform: WGS84 geodetic ⇄ local ENU conversion (pyproj)
"""
