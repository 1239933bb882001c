import logging, time
from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
import redis
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.database import Base, SessionLocal, engine
from app.routes import control, grid_status, sensor_data
from app import models  # noqa: F401  registers all tables on Base.metadata

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Secure headers middleware
class SecureHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Referrer-Policy'] = 'no-referrer'
        response.headers['Strict-Transport-Security'] = 'max-age=63072000; includeSubDomains; preload'
        return response

# Request logging middleware
class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        duration = (time.time() - start_time) * 1000  # ms
        logger.info(f"{request.method} {request.url.path} - {response.status_code} - {duration:.2f}ms")
        return response

Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Smart Grid API",
    description="REST API for the smart grid load balancing simulator",
    version="1.0.0"
)

# Enable compression
app.add_middleware(GZipMiddleware, minimum_size=1000)

# The simulator and dashboards post from anywhere by default
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"]
)

# Add secure headers
app.add_middleware(SecureHeadersMiddleware)

# Add request logging middleware
app.add_middleware(LoggingMiddleware)

app.include_router(sensor_data.router, prefix="/api", tags=["sensor data"])
app.include_router(control.router, prefix="/api/control", tags=["control"])
app.include_router(grid_status.router, prefix="/api", tags=["grid status"])

redis_client = redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)

@app.get("/")
def read_root():
    return {"message": "Welcome to the Smart Grid API", "docs": "/docs"}

@app.get("/health")
def health_check():
    db_status, redis_status = 'ok', 'ok'
    db = SessionLocal()
    try:
        db.execute(text('SELECT 1'))
    except SQLAlchemyError as e:
        db_status = f"error: {str(e)}"
    finally:
        db.close()
    # Redis is the Celery broker for the simulation task
    try:
        if not redis_client.ping():
            redis_status = "error: cannot ping Redis"
    except redis.RedisError as e:
        redis_status = f"error: {str(e)}"
    return {"db": db_status, "redis": redis_status}

logger.info("Smart Grid API started")
