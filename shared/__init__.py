"""
Shared Kernel

Value objects, domain exceptions and API helpers used by every app.
"""
