"""
Response DTOs

Shapes of outgoing API responses, built from domain records rather than
ORM rows.
"""
