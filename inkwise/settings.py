"""
Application Settings

This module provides a centralized settings class that loads environment 
variables from the .env file and makes them available throughout the application.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load the .env file from the project root
# The project root is one level up from the inkwise folder
PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")


class Settings:
    """
    Centralized settings class that provides access to all environment variables.
    Usage:
        from inkwise.settings import settings
        key = settings.STORAGE_KEY
    """
    
    # Database backing the key-value store (empty = in-memory store)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    
    # Single key holding the serialized session state
    STORAGE_KEY: str = os.getenv("STORAGE_KEY", "inkwise:v1")
    
    # Frontend origins allowed by CORS
    CORS_ORIGINS: list = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
        if origin.strip()
    ]
    
    # Debug mode
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    
    @classmethod
    def validate(cls) -> None:
        """Validate that all required environment variables are set."""
        errors = []
        
        if not cls.STORAGE_KEY.strip():
            errors.append("STORAGE_KEY must not be blank")
        
        if cls.DATABASE_URL and "://" not in cls.DATABASE_URL:
            errors.append("DATABASE_URL is not a valid database URL")
        
        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")


# Create a singleton instance for easy import
settings = Settings()
