"""Shift Scheduler package.

This package is organized by feature modules (users, shifts, leaves, reports)
with a thin Flask controller layer and service/repository layers underneath.
"""
