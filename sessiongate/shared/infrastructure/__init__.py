"""
Infrastructure Layer
====================

Technical adapters for external systems.

- identity: IdentityClient implementations
"""
