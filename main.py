import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
from transformer.errors import ShorthandError
from utils.config import load_settings
from utils.database import get_store
from api.router import get_routers

settings = load_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("shorthand")

# Initialize the definition store
@asynccontextmanager
async def lifespan(app: FastAPI):
    get_store().init()
    yield

app = FastAPI(title="Shorthand Table Definition API", lifespan=lifespan)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Compilation failures are client errors, nothing gets stored
@app.exception_handler(ShorthandError)
async def shorthand_error_handler(request: Request, exc: ShorthandError):
    logger.info("Shorthand compilation failed on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": exc.to_dict()})

# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }

# Include all routers from the API
for router in get_routers():
    app.include_router(router)

for route in app.routes:
    logger.debug("Registered route: %s", route.path)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
