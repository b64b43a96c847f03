"""
Pydantic schemas for API request and response validation.

Invoice models serialize with camelCase field names; everything else uses
the Python attribute names unless an alias is declared.
"""
