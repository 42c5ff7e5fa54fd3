"""
CLI support modules: output handling, settings and rendering for the
zephyr-codemod command.
"""

from zephyr_codemod.cli import codemod, config, output

__all__ = ['codemod', 'config', 'output']
