# log_redactor/core/__init__.py

"""Core domain models, policy loading and the error taxonomy.

This package provides the rule types, the policy loader and the exceptions
shared by the rest of the application.
"""
