from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import uvicorn
import logging
from config import API_PREFIX, CORS_ORIGINS, DEBUG, HOST, PORT
from database import create_tables

# Import routers
from users.router import contact_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI instance with documentation configuration
app = FastAPI(
    title="Contact Site API",
    description="Health check and contact form intake for the marketing website",
    version="1.0.0",
    openapi_url=f"{API_PREFIX}/openapi.json",
    docs_url=f"{API_PREFIX}/docs",
    redoc_url=f"{API_PREFIX}/redoc",
    debug=DEBUG
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    # Log exception with request details for better debugging
    logger.error(
        f"Global exception: {exc}",
        extra={
            "path": request.url.path,
            "method": request.method,
            "client": request.client.host if request.client else "unknown",
        }
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error. The error has been logged."}
    )

# Handle request errors FastAPI catches before a route runs (e.g. malformed JSON)
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(
        f"Validation error: {exc}",
        extra={"path": request.url.path}
    )
    return JSONResponse(
        status_code=422,
        content={"detail": "Validation error", "errors": jsonable_errors(exc)}
    )


def jsonable_errors(exc: RequestValidationError):
    return [
        {"field": ".".join(str(part) for part in error["loc"]), "kind": error["type"], "message": error["msg"]}
        for error in exc.errors()
    ]

# Contact routes
app.include_router(contact_router, prefix=f"{API_PREFIX}")

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "Welcome to the Contact Site API",
        "documentation": f"{API_PREFIX}/docs",
        "redoc": f"{API_PREFIX}/redoc"
    }

# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "ok"}

# Event handler to create database tables at startup
@app.on_event("startup")
async def startup_event():
    create_tables()
    logger.info("Database tables created")

# Run the application
if __name__ == "__main__":
    logger.info(f"Server running on port {PORT}")
    uvicorn.run("main:app", host=HOST, port=PORT, reload=DEBUG)
