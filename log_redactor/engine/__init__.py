# log_redactor/engine/__init__.py

"""Engine package providing the per-context matcher cache and the redactor.

This package contains the hot-path components that apply a loaded RuleStore
to individual log messages.
"""
