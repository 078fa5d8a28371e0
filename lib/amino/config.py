"""Configuration management for the set-top box monitor."""

from pathlib import Path

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AminoConfig(BaseSettings):
    """Main configuration class."""

    model_config = SettingsConfigDict(
        env_prefix="AMINO_",
        case_sensitive=False,
        extra="ignore",
    )

    # Device
    host: str = Field(default="", description="Set-top box IP address")
    port: int = Field(default=23, description="Telnet port")
    username: str = Field(default="root", description="Login username")
    password: str = Field(default="", description="Login password")

    # Polling
    poll_interval: float = Field(default=30.0, description="Seconds between polls")

    # API server
    api_host: str = Field(default="0.0.0.0", description="API bind address")
    api_port: int = Field(default=8000, description="API bind port")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Enable JSON logging")
    log_file: str | None = Field(default=None, description="Log file path")

    @classmethod
    def load_from_yaml(cls, path: str | Path) -> "AminoConfig":
        """Load configuration from YAML file.

        Parameters
        ----------
        path : str | Path
            Path to YAML file

        Returns
        -------
        AminoConfig
            Loaded configuration
        """
        yaml_path = Path(path)
        if not yaml_path.exists():
            # Return defaults if file doesn't exist
            return cls()

        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}

        # Extract amino section if present
        amino_data = data.get("amino", {})
        if not amino_data:
            amino_data = data

        return cls(**amino_data)


def load_config(config_file: str | Path | None = None) -> AminoConfig:
    """Load configuration from file or environment.

    Parameters
    ----------
    config_file : str | Path | None, optional
        Path to config file, by default None (environment only)

    Returns
    -------
    AminoConfig
        Loaded configuration
    """
    if config_file:
        return AminoConfig.load_from_yaml(config_file)

    return AminoConfig()
