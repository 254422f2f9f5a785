"""
Configuration management for calcpad.

Handles loading configuration from environment variables and `.env`
files, and provides sensible defaults for all settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings."""
    
    model_config = SettingsConfigDict(
        env_prefix="CALCPAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    
    # Application settings
    app_name: str = "calcpad"
    log_level: str = "INFO"
    
    # Server settings
    host: str = "127.0.0.1"
    port: int = 8000
    
    # Engine settings
    max_entry_length: int = Field(12, ge=1)  # Typed characters per operand
    history_size: int = Field(5, ge=1)
    result_decimals: int = Field(8, ge=0)  # Suppresses binary float artifacts
    error_recovery_delay: float = Field(1.0, ge=0)  # Seconds "Error" stays up
    
    # Display settings
    thousands_separator: str = ","
    
    # Keyboard settings
    sign_toggle_keys: list[str] = Field(default_factory=lambda: ["F9", "_", "±"])


# Global settings instance
settings = Settings()
