"""
remove.bg relay microservice package.

Exposes the settings loader, the upstream remove.bg client, and the FastAPI
application that keeps the remove.bg API key on the server.
"""

