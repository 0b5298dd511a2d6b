"""
Service layer.
- credentials: user lookup, registration and password verification
"""
