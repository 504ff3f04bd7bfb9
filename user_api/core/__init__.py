"""
Core utilities shared across the user account service.

This package hosts configuration, logging, the credential hasher, the bearer
token issuer/verifier and the error kinds translated into HTTP responses.
Nothing here imports from the service or router layers.
"""
