"""
AgriScan Backend - Route Dependencies
======================================

What:  FastAPI dependency functions that hand route handlers the services
       built by create_app().
How:   create_app() stores one instance of each service on `app.state`;
       these functions read them back per request. Tests build an app with
       fakes and the routes pick those up unchanged.
"""

from fastapi import Request

from agriscan.services.llm_base import TextCompletionService
from agriscan.services.scan_service import ScanService


def get_text_service(request: Request) -> TextCompletionService:
    return request.app.state.text_service


def get_scan_service(request: Request) -> ScanService:
    return request.app.state.scan_service
