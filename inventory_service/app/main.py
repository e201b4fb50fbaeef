# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Base, engine
from shared.core.log_config import configure_logging
from shared.exception_handler import setup_exception_handlers
from shared.models import users  # noqa: F401  (token checks read the users table)
from .models import inventory_items  # noqa: F401
from .router import inventory_items_router

configure_logging()

# Create all tables
Base.metadata.create_all(bind=engine)

app = FastAPI(title="StockWise Inventory Service API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
setup_exception_handlers(app)

# Include routers
app.include_router(inventory_items_router.router)


@app.get("/api/inventory-service/health")
def health():
    return {"status": "healthy"}
