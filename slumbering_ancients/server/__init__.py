"""
Slumbering Ancients Server Package.

This package contains the web server of the campaign companion: the FastAPI
application, its API routers, exception handlers, middleware and the
request-scoped services behind the assistant, map analysis and wiki sync.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration settings and constants.
    services: Dependency providers and orchestration of LLM-backed features.
"""
