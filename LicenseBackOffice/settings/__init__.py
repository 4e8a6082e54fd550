"""
Django settings package.

- base.py: settings shared across all environments
- dev.py: development
- test.py: test runs
- prod.py: production
"""
