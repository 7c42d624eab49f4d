"""
Products module.

Catalog entries any signed-in user can post; only the poster or an
administrator may change or remove them.
"""
