"""
dirconf package initializer.

Objectives (package versions, rendered templates) are declared in ccm files
and checked or configured against a target system; see ``dirconf.cli.main``.
"""

__version__ = "0.1.0"
