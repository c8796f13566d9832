"""
Klarity API package.

Provides the FastAPI application for the Klarity restaurant platform.
The application lives in api.app (create_app / app); it is not imported
here so that module routers can import api.dependencies freely.
"""
