"""Extension layer — discount requirement rules via pluggy.

Rules are registered explicitly by system name; there is no entry-point
discovery.
"""

from hasoneproduct.plugins.hookspecs import hookimpl
from hasoneproduct.plugins.manager import RuleManager

__all__ = ["RuleManager", "hookimpl"]
