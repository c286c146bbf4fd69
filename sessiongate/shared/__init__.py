"""
SessionGate Shared Kernel
=========================

Architecture:
- core: EventBus, errors, diagnostics, configuration
- domain: identity types and session reconciliation
- infrastructure: identity provider adapters
"""

__version__ = "0.1.0"

__all__ = []
