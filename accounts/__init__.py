"""Tenant accounts service: owner registration and business-scoped login."""
