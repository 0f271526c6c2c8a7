# Services package init
"""
AgriScan Backend - Services Layer
==================================

What:  Business logic between the routes (HTTP) and the document stores.
How:   Services are constructed once by the application factory and handed
       to routes through FastAPI dependencies (see agriscan/dependencies.py).

Service Inventory:
    - TextCompletionService (abstract): prompt + language → answer text
    - GeminiService: TextCompletionService on Google Gemini
    - format_response: AI answer → HTML fragment
    - ScanService: save scans / list farmers over a DocumentStore
    - DocumentStore (abstract): InMemory, Firestore and SQL implementations
"""
