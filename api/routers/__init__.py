"""
FastAPI routers grouped by resource (auth, blogs, projects, system).

Each module exposes an APIRouter included by create_app(); services are looked
up on app.state so the app factory controls their lifecycle.
"""
