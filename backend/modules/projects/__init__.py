"""
Projects module.

Portfolio categories, each embedding its showcased projects.
Administrators manage categories and projects.
"""
