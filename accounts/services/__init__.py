"""
Use cases for the accounts service.

Each service orchestrates the repository and core adapters to implement a
business rule (register an owner, log into a business, verify an email).
Routers call these services instead of touching the database directly.
"""
