"""
stylistbook - Appointment booking for stylists against discrete time slots.
"""

__version__ = "0.1.0"
