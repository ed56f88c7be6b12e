"""
Contacts API package.

Provides a FastAPI application for managing contact records, with a
SQL-backed store, optional avatar storage in an S3-compatible bucket and
session/OIDC authentication scaffolding.
"""
