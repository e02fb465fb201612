"""QR timeclock package.

Organized by feature modules (attendance, locations, scans, hours, ...)
with a thin Flask controller layer over service/repository layers.
"""
