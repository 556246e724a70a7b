"""
Workforce summary module.
"""

from .composer import SummaryComposer, compute_summary
from .models import Summary

__all__ = ["SummaryComposer", "Summary", "compute_summary"]
