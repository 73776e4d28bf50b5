from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "INFO"
    default_timezone: str = "UTC"  # applied to timestamps without an explicit offset
    max_batch_size: int = 10000  # API rejects larger batches with 413
    offload_threshold: int = 500  # batches this large are evaluated off the event loop

    class Config:
        env_file = ".env"
        extra = "ignore"

    @field_validator("default_timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        if value.upper() == "UTC":
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value!r}") from e
        return value

    def default_tzinfo(self) -> tzinfo:
        if self.default_timezone.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.default_timezone)


settings = Settings()
