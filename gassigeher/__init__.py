"""Booking time rules and availability engine for dog walk reservations."""
