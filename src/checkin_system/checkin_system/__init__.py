"""Check-in System package.

This package is organized by feature modules (inscritos, attendance, badges,
archives, notifications) with a thin Flask controller/CLI layer on top of
service/repository layers.
"""
