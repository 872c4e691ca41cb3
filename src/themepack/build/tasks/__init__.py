"""
Theme build tasks package.

Modules are collected into the themepack namespace by the top-level
__init__.py using Collection.from_module().
"""
