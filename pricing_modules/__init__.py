"""
Pricing Modules.

Thin orchestration layers over the pricing kernel and engines.

Modules:
- Projects: project library records, deliverable editing, the shared
  role-weight table and project evaluation

Actual calculation logic lives in the engines.
"""

from pricing_modules import projects

__all__ = ["projects"]
