# Middleware package init
"""
Cash Card Service — Middleware Package
========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every later log line and error body can carry it
    2. Logging: measures the full downstream duration and final status
"""
