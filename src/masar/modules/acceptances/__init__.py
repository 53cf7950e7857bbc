"""
Acceptances Module

Admin-moderated acceptance of teachers by schools.
"""

from masar.modules.acceptances.models import Acceptance, AcceptanceStatus

__all__ = ["Acceptance", "AcceptanceStatus"]
