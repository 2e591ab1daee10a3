# log_redactor/service/__init__.py

"""Process-wide service: settings, shared engine and logging integration."""
