"""
Configurator - Test Suite Package.

Pytest-based unit tests for path validation, settings stores,
the registry, the manager, settings loading and JSON helpers.
"""
