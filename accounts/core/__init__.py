"""
Core utilities shared across the accounts service.

This package hosts configuration, logging setup, password hashing,
token signing and the SMTP mailer. Services depend on these primitives
instead of reading the environment or talking to SMTP directly.
"""
