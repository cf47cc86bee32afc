"""Attendance Engine package.

This package is organized by feature modules (events, validation, streaks,
integrity, reporting) around a stateless rule engine, with a thin Flask
controller layer on top for callers that want JSON over HTTP.
"""
