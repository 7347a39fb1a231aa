import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load .env once at start-up
load_dotenv()

class Settings(BaseModel):
    gemini_api_key: str | None = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")
    emission_window_seconds: int = Field(
        default=86400, gt=0, alias="EMISSION_WINDOW_SECONDS"
    )
    emission_factors_file: str | None = Field(default=None, alias="EMISSION_FACTORS_FILE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    @classmethod
    def from_env(cls):
        data = {
            "GEMINI_API_KEY": os.getenv("GEMINI_API_KEY"),
            "GEMINI_MODEL": os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            "EMISSION_WINDOW_SECONDS": os.getenv("EMISSION_WINDOW_SECONDS", "86400"),
            "EMISSION_FACTORS_FILE": os.getenv("EMISSION_FACTORS_FILE") or None,
            "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
            "HOST": os.getenv("HOST", "127.0.0.1"),
            "PORT": os.getenv("PORT", "8000"),
        }
        return cls.model_validate(data)

settings = Settings.from_env()
