# Routes package init
"""
AgriScan Backend - API Routes Package
======================================

Route Inventory:
    - gemini.py:  POST /gemini     (AI answer in the requested language)
    - scans.py:   POST /saveScan   (store a farmer scan report)
                  GET  /getFarms   (list farmer records)
    - health.py:  GET  /health     (service health check)

Routes stay thin: read the body, call a service, pick the status code.
Errors are raised as application exceptions and formatted by the global
handlers in main.py.
"""
