"""
Request DTOs

Validated bodies of incoming API requests.
"""
