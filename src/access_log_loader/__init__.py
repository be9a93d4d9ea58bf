"""
Access log loader.

Validates newline-delimited JSON access logs and loads them into a
relational store, reporting progress and failures to a notification channel.
"""

__version__ = "1.0.0"
