"""
dart_dev: run Dart project tooling with per-project defaults.

The task functions in dart_dev.api can be called directly; the dart_dev
command-line entry point lives in dart_dev.cli.
"""

__version__ = "0.1.0"
