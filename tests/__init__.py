"""
Test suite for the Task Dashboard API.

This package contains:
- unit/: Services, tokens, validation and repositories in isolation
- integration/: HTTP tests through the Flask test client
- security/: Adversarial input and mass-assignment checks
"""
