"""Workforce attendance tracker.

The package is organized by feature modules (geofence, attendance, analytics,
organizations, leaves) with a thin Flask controller layer on top of services
and repository protocols.
"""
