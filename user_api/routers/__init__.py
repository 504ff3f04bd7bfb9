"""
FastAPI routers grouped by domain.

Each module exposes an APIRouter included by user_api.app.create_app().
"""
