"""
FastAPI Todo Backend package.

Storage backends live in `repositories` (in-memory) and `db` (SQLite),
validation in `service`, and the HTTP layer in `main` and `routers`.
"""
