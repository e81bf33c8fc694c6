# Middleware package init
"""
Zogakzip Backend — Middleware Package
=======================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every later log line can carry it
    2. Logging: records method, path, status and duration once the
       response is known
    3. GZip and CORS: FastAPI's stock middleware
"""
