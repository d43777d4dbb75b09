"""
HTTP test package for the Task Dashboard API.

Tests drive the Flask test client against an in-memory SQLite database and
cover:
- Auth and task CRUD endpoints
- Per-user isolation
- Error envelopes and authentication failures
"""
