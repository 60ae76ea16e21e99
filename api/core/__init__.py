"""
Core utilities shared across the portfolio CMS API.

- configuration (config.py) and logging setup (logger.py)
- the error taxonomy mapped to HTTP responses (errors.py)
- password hashing (security.py) and small time/id helpers (utils.py)
"""
