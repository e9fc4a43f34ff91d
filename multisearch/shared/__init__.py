"""Shared utilities: telemetry and datetime helpers.

Used by domain, application, and core layers. No business logic.
"""
