"""
Pricing Kernel

Shared infrastructure and domain value types for the deliverable-based
revenue allocation calculator:
- Structured JSON logging
- Typed exception hierarchy
- Immutable pricing inputs and model types
"""

__version__ = "0.1.0"
