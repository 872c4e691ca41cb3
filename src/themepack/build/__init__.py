"""
Build package for themepack.

This package contains the theme build, watch and deployment tooling.
"""
