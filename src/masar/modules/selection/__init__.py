"""
Selection Module

School shortlists of selected teachers and the admin notification sent on
each new selection.
"""

from masar.modules.selection.models import SchoolSelection

__all__ = ["SchoolSelection"]
