"""
Shared Domain
=============

- identity: provider-facing types and the IdentityClient protocol
- session: session state reconciliation
"""
