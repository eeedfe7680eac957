"""
Configuration management for the Instrument Data module.
Loads settings from config.yaml and environment variables.
"""
import os
import yaml
from pathlib import Path
from typing import Literal, Optional
from pydantic import BaseModel
from dotenv import load_dotenv


class DatabaseConfig(BaseModel):
    """Database configuration"""
    host: str
    port: int
    database: str
    user: Optional[str] = None  # Direct user (for dev)
    password: Optional[str] = None  # Direct password (for dev)
    user_env: Optional[str] = None  # Or environment variable name
    password_env: Optional[str] = None  # Or environment variable name
    min_pool_size: int = 2
    max_pool_size: int = 10
    command_timeout: Optional[float] = 30.0


class LoggingConfig(BaseModel):
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class RollingConfig(BaseModel):
    """Rolling set resolution settings"""
    # 'exact' parses the month universe into tokens, 'substring' scans the raw string
    month_match: Literal["exact", "substring"] = "exact"


class Config(BaseModel):
    """Main configuration container"""
    database: DatabaseConfig
    logging: LoggingConfig = LoggingConfig()
    rolling: RollingConfig = RollingConfig()

    @property
    def db_user(self) -> str:
        """Get database user (from direct config or environment variable)"""
        if self.database.user:
            return self.database.user

        if self.database.user_env:
            user = os.getenv(self.database.user_env)
            if user:
                return user

        return "postgres"

    @property
    def db_password(self) -> str:
        """Get database password (from direct config or environment variable)"""
        if self.database.password is not None:
            return self.database.password

        if self.database.password_env:
            password = os.getenv(self.database.password_env)
            if password:
                return password

        # Empty for dev (trust authentication)
        return ""

    @property
    def db_dsn(self) -> str:
        """Get database DSN (connection string)"""
        return f"postgresql://{self.db_user}:{self.db_password}@{self.database.host}:{self.database.port}/{self.database.database}"


def load_config(
    config_path: str = None,
    env_file: str = None
) -> Config:
    """
    Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to config.yaml file. If None, uses INSTRUMENT_DATA_CONFIG_PATH
                     or the config.yaml shipped with the package.
        env_file: Path to .env file. If None, searches for .env.local in current
                  and parent directories.

    Returns:
        Config: Validated configuration object
    """
    if env_file is None:
        current_dir = Path.cwd()
        for parent in [current_dir] + list(current_dir.parents):
            env_path = parent / '.env.local'
            if env_path.exists():
                load_dotenv(env_path)
                break
    else:
        load_dotenv(env_file)

    if config_path is None:
        config_path = os.getenv('INSTRUMENT_DATA_CONFIG_PATH')

        if config_path is None:
            config_path = Path(__file__).parent / "config.yaml"

    with open(config_path, 'r') as f:
        config_data = yaml.safe_load(f)

    return Config(**config_data)


# Global config instance
_config: Config = None


def get_config(
    config_path: str = None,
    env_file: str = None,
    reload: bool = False
) -> Config:
    """
    Get the global configuration instance.

    Args:
        config_path: Optional path to config file (only used on first load or reload)
        env_file: Optional path to .env file (only used on first load or reload)
        reload: If True, reload configuration from disk

    Returns:
        Config: Configuration instance
    """
    global _config
    if _config is None or reload:
        _config = load_config(config_path=config_path, env_file=env_file)
    return _config


def set_config(config: Config) -> None:
    """
    Manually set the global configuration instance.
    Useful for testing or programmatic configuration.
    """
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration instance. Useful for testing."""
    global _config
    _config = None
