"""FastAPI application entrypoint."""

from dotenv import load_dotenv
from fastapi import FastAPI

from app.adapters.inbound.http.error_handlers import register_error_handlers
from app.adapters.inbound.http.routes import router

# Load environment variables from .env file
load_dotenv()

app = FastAPI(
    title="Lead Disposition Engine",
    description="Lead disposition, assignment and pool distribution using Clean Architecture",
    version="0.1.0",
)

register_error_handlers(app)
app.include_router(router)
