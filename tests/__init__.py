# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_page, make_property, run
"""

from .utils import make_dataset, make_page, make_property, run

__all__ = ["make_page", "make_property", "make_dataset", "run"]
