"""Task manager: CRUD HTTP service for tasks over PostgreSQL."""
