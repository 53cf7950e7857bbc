"""
Selection Helpers

Pure functions used by the selection service.
"""

from uuid import UUID


def format_teacher_selection_message(
    school_name: str, teacher_name: str, teacher_id: UUID | str
) -> str:
    """
    Build the WhatsApp message sent to the admin when a school selects a teacher.

    Args:
        school_name: Name of the selecting school
        teacher_name: Full name of the selected teacher
        teacher_id: ID of the selected teacher

    Returns:
        Message text ready for delivery
    """
    return (
        "🎓 New Teacher Selection!\n\n"
        f"School: {school_name}\n"
        f"Teacher: {teacher_name}\n"
        f"Teacher ID: {teacher_id}\n\n"
        "A school has accepted a teacher. Please review in the admin panel."
    )
