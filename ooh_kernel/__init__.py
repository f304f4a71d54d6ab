"""
OOH Kernel

Pure foundations for the campaign billing engine:
- Structured JSON logging with request-scoped context
- Typed exception hierarchy
- Date, rounding and billing-convention value objects
- Injectable clock
"""

__version__ = "0.1.0"
