"""
Internal DTOs

Transient objects of the upload pipeline. Never serialized to clients.
"""
