#run it with uvicorn ideal_properties.main:app --reload
from contextlib import asynccontextmanager
from fastapi import FastAPI
from dotenv import load_dotenv
import logging

# Load environment variables from .env file
load_dotenv()

from ideal_properties.api.v1.api_router import api_router
from ideal_properties.core.config import get_settings
from ideal_properties.core.cors import SiteCORSMiddleware
from ideal_properties.core.exceptions import FunctionError, function_error_handler

settings = get_settings()

# Set up logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database on startup and release connections on shutdown"""
    from ideal_properties.db.mongo import close_client

    if settings.mongodb_url or settings.mongo_uri:
        from ideal_properties.db.init_db import initialize_database, verify_database_setup
        try:
            if await initialize_database():
                logger.info("✅ Database initialization completed successfully")
            else:
                logger.warning("⚠️ Database initialization completed with warnings")

            verification = await verify_database_setup()
            if verification.get("overall_status") != "PASS":
                logger.warning(f"⚠️ Database verification status: {verification.get('overall_status')}")
        except Exception as e:
            # Contact and review functions do not need the database
            logger.error(f"❌ Database initialization failed: {str(e)}")
    else:
        logger.warning("⚠️ MONGODB_URL not set - listing, blog and storage routes will fail")

    yield

    close_client()


app = FastAPI(title="iDeal Properties Backend", version="1.0.0", lifespan=lifespan)

# CORS setup
app.add_middleware(
    SiteCORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(FunctionError, function_error_handler)

app.include_router(api_router)


@app.get("/api/health")
def health_check():
    """
    Health check endpoint.
    Reports which integrations are configured, never their values.
    """
    return {
        "status": "ok",
        "env_vars": {
            "mongodb_url": bool(settings.mongodb_url or settings.mongo_uri),
            "resend_api_key": bool(settings.resend_api_key),
            "contact_recipient_email": bool(settings.contact_recipient_email),
            "google_places_api_key": bool(settings.google_places_api_key),
            "owner_passcode": bool(settings.owner_passcode),
        },
        "place_resolution": "fixed_id" if settings.google_place_id else "text_search",
    }
