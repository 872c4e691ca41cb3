"""
Console entry point: `themepack build|develop|deploy|version|clean`.
"""

from invoke import Program

from themepack import __version__, namespace

program = Program(name='themepack', binary='themepack', namespace=namespace, version=__version__)
