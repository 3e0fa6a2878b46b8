"""
Application configuration management.
"""

from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Parsing
    default_language: str = "java"
    max_source_length: int = 1_000_000
    
    # Tree walk limits
    max_tree_depth: int = 10_000
    max_tree_nodes: int = 1_000_000
    
    # HTTP
    cors_origins: List[str] = ["*"]
    
    # Application
    log_level: str = "INFO"
    
    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
