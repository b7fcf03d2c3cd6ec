"""Appointment scheduling and time-slot allocation for a hospital front desk."""

__version__ = "1.0.0"
