"""Screens app package.

This app holds the screen aggregate with its weekly availability windows and
rate card, together with the availability and pricing engines that decide
whether a slot can be booked and what it costs.
"""
