from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # App Config
    APP_NAME: str = "Topic Quiz Generator"
    ENVIRONMENT: str = "development" # "development" or "production"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None
    LOG_RAW_RESPONSES: bool = True

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5001
    CORS_ORIGINS: List[str] = ["*"]

    # LLM Config
    LLM_PROVIDER: str = "openai" # "openai" or "huggingface"

    # OpenAI (or any OpenAI compatible endpoint)
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: Optional[str] = None
    MODEL_NAME: str = "gpt-4o-mini"

    # Hugging Face Inference API
    HUGGINGFACE_API_TOKEN: Optional[str] = None
    HF_MODEL_ID: str = "meta-llama/Meta-Llama-3-8B-Instruct"

    LLM_TIMEOUT: float = 60.0
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 4096

    # Generation
    QUESTION_COUNT: int = Field(default=10, ge=1, le=50)
    GENERATION_MAX_RETRIES: int = Field(default=0, ge=0, le=1) # only transport failures are retried

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
