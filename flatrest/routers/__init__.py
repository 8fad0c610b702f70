"""
FastAPI routers grouped by resource (users, catalog, examples).

Each module exposes an APIRouter that app.py includes; examples goes last
because of its catch-all GET route.
"""
