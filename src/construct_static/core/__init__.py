"""
Core Layer - shared contracts.

This package contains:
- Configuration management (settings.py)
- Error hierarchy (errors.py)
- Core data types and protocols (types.py)
- Name lookup and initializer discovery (introspection.py)
- Trace collection
"""
