"""
Pricing module.

Public pricing categories, each embedding its plans. Administrators
manage categories and plans.
"""
