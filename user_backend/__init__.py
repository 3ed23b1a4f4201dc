"""
User Management Backend — root package.

This package contains the FastAPI app entry point (main.py), API routes,
the User domain (validators, schema rules, error taxonomy), use cases and
the MongoDB infrastructure.
"""
