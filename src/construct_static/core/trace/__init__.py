"""
Trace Module.

This package contains tracing components:
- Trace context
"""

from construct_static.core.trace.trace_context import TraceContext

__all__ = ['TraceContext']
