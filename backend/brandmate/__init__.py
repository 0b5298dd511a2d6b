"""
BrandMate: user accounts with bearer-token sessions, plus a tiny name-submission API.

- brandmate.main: FastAPI application (server side)
- brandmate.client: session store and auth orchestration for client apps
"""
__version__ = "1.0.0"
