"""
Specialties module - The teaching specialty taxonomy.

The Specialty model lives with teachers, who register for specialties.
"""
