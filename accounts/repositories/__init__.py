"""
Persistence adapters.

Services depend on the repository rather than opening sessions themselves.
"""
