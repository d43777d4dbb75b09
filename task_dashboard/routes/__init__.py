"""
Route blueprints for the Task Dashboard API.

- health: liveness probe
- auth: registration, login, current profile
- tasks: task CRUD for the authenticated user
"""
