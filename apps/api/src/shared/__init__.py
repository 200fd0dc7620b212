"""Shared utilities and cross-domain components.

This module contains utilities used across multiple domains:
- Exception classes mapped to HTTP status codes
- Ownership and sharing checks for contacts, deals and activities
- Pagination metadata and partial-update helpers
"""
