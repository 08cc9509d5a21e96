"""
FastAPI routers grouped by collection (articles, photos, videos) plus the
home page.

Each module exposes an APIRouter that app.py includes. Routers go through the
CollectionStore kept on app.state and translate store errors into responses.
"""
