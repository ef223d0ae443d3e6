from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional, List

DEFAULT_BRAND_NAME = "iDeal Properties"


class Settings(BaseSettings):
    # Email relay (Resend)
    resend_api_key: Optional[str] = None
    resend_api_url: str = "https://api.resend.com/emails"
    contact_recipient_email: Optional[str] = None
    contact_from_email: Optional[str] = None
    contact_brand_name: str = DEFAULT_BRAND_NAME

    # Google Places reviews
    google_places_api_key: Optional[str] = None
    google_places_api_url: str = "https://maps.googleapis.com/maps/api/place"
    google_place_id: Optional[str] = None  # Skips the text search when set
    google_place_query: Optional[str] = None

    # None leaves the timeout to the hosting platform
    upstream_timeout_seconds: Optional[float] = None

    # MongoDB URI - must be provided via environment variables
    mongodb_url: Optional[str] = None
    mongo_uri: Optional[str] = None  # Alternative environment variable name

    # Owner portal
    owner_passcode: Optional[str] = None

    # Storage and images
    public_base_url: str = ""
    asset_base_url: str = "/assets"
    max_upload_mb: int = 8
    storage_buckets: str = "properties"

    # CORS settings
    allowed_origins: str = "*"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def effective_from_email(self) -> Optional[str]:
        """Sender address, falling back to the recipient inbox"""
        return self.contact_from_email or self.contact_recipient_email

    @property
    def brand_from(self) -> str:
        return f"{self.contact_brand_name} <{self.effective_from_email}>"

    @property
    def place_query(self) -> str:
        return self.google_place_query or self.contact_brand_name

    @property
    def effective_mongo_uri(self) -> str:
        """Get the effective MongoDB URI from available sources"""
        uri = self.mongodb_url or self.mongo_uri
        if not uri:
            raise ValueError("MongoDB URI not configured! Please set MONGODB_URL in your environment variables.")
        return uri

    @property
    def allowed_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def storage_buckets_list(self) -> List[str]:
        return [bucket.strip() for bucket in self.storage_buckets.split(",") if bucket.strip()]

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


@lru_cache
def get_settings():
    return Settings()
