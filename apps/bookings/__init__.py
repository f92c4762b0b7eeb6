"""Bookings app package.

This app encapsulates the screen booking lifecycle: creation of a booking
after the availability and pricing checks, owner confirmation, cancellation,
completion and payment status tracking. Creation holds a row lock on the
screen, so two overlapping requests for the same screen cannot both succeed.
"""
