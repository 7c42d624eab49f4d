"""
Services module.

The agency's service offerings, filterable and paginated for the public
site. Administrators manage the catalog.
"""
