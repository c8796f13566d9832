"""Request middleware and FastAPI dependencies for auth, locale and rate limiting."""
