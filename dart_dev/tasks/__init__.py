"""
Task handlers for dart_dev.

Each module exposes run(config, options) -> TaskResult, translating a
resolved configuration into one invocation of an external Dart tool.
"""
