"""
projectboard: minimal project-management demo.

A FastAPI service exposing CRUD over "project" records backed by an async
SQLAlchemy store, a demo-credential login issuing short-lived JWTs, a
first-run seeder, and a headless client (httpx wrapper + state controller)
mirroring the browser UI.
"""
