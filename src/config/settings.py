"""
Application settings and configuration
"""

import os
from pathlib import Path
from dotenv import load_dotenv
from typing import Optional

# Load environment variables from .env file
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings:
    """Application settings loaded from environment variables"""
    
    # Task API backend
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:8080")
    API_TIMEOUT: float = float(os.getenv("API_TIMEOUT", "30"))
    
    # Auth token persistence
    TOKEN_STORE_PATH: str = os.getenv("TOKEN_STORE_PATH") or str(
        Path.home() / ".task_dashboard" / "auth.json"
    )
    
    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: Optional[str] = os.getenv("LOG_DIR", "logs")
    WEB_HOST: str = os.getenv("WEB_HOST", "0.0.0.0")
    WEB_PORT: int = int(os.getenv("WEB_PORT", "8000"))
    
    @classmethod
    def validate(cls) -> bool:
        """Validate that all required settings are present"""
        if not cls.API_BASE_URL:
            raise ValueError("Missing required environment variable: API_BASE_URL")
        
        if cls.API_TIMEOUT <= 0:
            raise ValueError(f"API_TIMEOUT must be positive, got {cls.API_TIMEOUT}")
        
        return True


# Global settings instance
settings = Settings()
