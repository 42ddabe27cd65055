"""
Pydantic schemas package.

Request and response shapes for every resource.
"""
