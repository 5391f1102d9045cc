"""
Student registrations: enrollment lifecycle, its admission gates and role-based authorization.
"""

__version__ = "0.1.0"
