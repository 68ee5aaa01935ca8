"""
Jobly Backend.

Core components:
- db: Engine, sessions, table models and the positional query runner
- helpers: SQL fragment builders for partial updates and searches
- models: Company, job, user and application access functions
- api: FastAPI app, auth dependencies and routes
"""
