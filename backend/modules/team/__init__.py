"""
Team module.

The public team directory and its departments. Administrators manage
members and departments.
"""
