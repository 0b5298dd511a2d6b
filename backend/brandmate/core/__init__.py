"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Application initialization and default admin creation
- db: Database configuration and connection management
- errors: Error taxonomy mapped to HTTP responses at the app boundary
- security: Password hashing and JWT token issuance/decoding
"""
