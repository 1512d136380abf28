"""
Configuration management for Transfer Kit

Loads settings from environment variables and .env file.
Includes logging configuration with file output and correlation ID support.
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, List

from dotenv import load_dotenv


def _load_env_file():
    """Load .env file from project root"""
    current = Path(__file__).parent.parent  # transfer_kit package parent
    env_file = current / ".env"

    if env_file.exists():
        load_dotenv(env_file)


# Load .env on module import
_load_env_file()


def _get_env(key: str, default: Optional[str] = "") -> Optional[str]:
    """Get environment variable with default"""
    value = os.getenv(key)
    if value is None:
        return default
    return value


def _get_env_float(key: str, default: float) -> float:
    """Get environment variable as float"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid float value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_int(key: str, default: int) -> int:
    """Get environment variable as int"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid int value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as bool"""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def parse_rpc_url_map(value: str) -> Dict[int, str]:
    """
    Parse "<chainId>=<url>,<chainId>=<url>" into a dict

    Malformed entries are skipped with a warning.
    """
    urls: Dict[int, str] = {}
    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        chain_id, sep, url = entry.partition("=")
        try:
            if not sep or not url.strip():
                raise ValueError("missing url")
            urls[int(chain_id.strip())] = url.strip()
        except ValueError:
            logging.getLogger(__name__).warning(f"Skipping invalid EVM RPC entry: '{entry}'")
    return urls


@dataclass
class RpcConfig:
    """JSON-RPC client configuration"""
    timeout_seconds: float = field(default_factory=lambda: _get_env_float("RPC_TIMEOUT_SECONDS", 30.0))
    max_retries: int = field(default_factory=lambda: _get_env_int("RPC_MAX_RETRIES", 3))
    retry_delay_seconds: float = field(default_factory=lambda: _get_env_float("RPC_RETRY_DELAY_SECONDS", 0.5))
    commitment: str = field(default_factory=lambda: _get_env("RPC_COMMITMENT", "confirmed"))


@dataclass
class SolanaConfig:
    """Solana cluster endpoints and transaction settings"""
    mainnet_rpc_url: str = field(default_factory=lambda: _get_env(
        "SOLANA_MAINNET_RPC_URL", "https://api.mainnet-beta.solana.com"
    ))
    devnet_rpc_url: str = field(default_factory=lambda: _get_env(
        "SOLANA_DEVNET_RPC_URL", "https://api.devnet.solana.com"
    ))
    testnet_rpc_url: str = field(default_factory=lambda: _get_env(
        "SOLANA_TESTNET_RPC_URL", "https://api.testnet.solana.com"
    ))
    default_cluster: str = field(default_factory=lambda: _get_env("SOLANA_DEFAULT_CLUSTER", "devnet"))
    # Stale blockhashes are rejected, so builds always ask for a finalized one
    blockhash_commitment: str = field(default_factory=lambda: _get_env("SOLANA_BLOCKHASH_COMMITMENT", "finalized"))


@dataclass
class EVMConfig:
    """EVM node endpoints, keyed by chain id"""
    rpc_urls: Dict[int, str] = field(default_factory=lambda: parse_rpc_url_map(_get_env("EVM_RPC_URLS", "")))
    timeout: int = field(default_factory=lambda: _get_env_int("EVM_RPC_TIMEOUT", 30))


@dataclass
class BalancesApiConfig:
    """Indexed balances API configuration"""
    base_url: str = field(default_factory=lambda: _get_env("BALANCES_API_BASE_URL", "https://app.dynamic.xyz/api/v0"))
    environment_id: str = field(default_factory=lambda: _get_env("BALANCES_API_ENVIRONMENT_ID", ""))
    timeout: float = field(default_factory=lambda: _get_env_float("BALANCES_API_TIMEOUT", 30.0))


def _get_default_log_path() -> str:
    """Get default log file path under transfer_kit/log/ with UTC timestamp"""
    from datetime import datetime, timezone
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    log_dir = Path(__file__).parent / "log"
    return str(log_dir / f"transfer_kit_{timestamp}.log")


@dataclass
class LoggingConfig:
    """
    Logging configuration with file output and correlation ID support.

    Environment variables:
        LOG_FILE: Path to log file (empty disables file output, which is the default)
        LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
        LOG_FORMAT: Custom log format string
        LOG_CONSOLE: Enable console output (default: true)
        LOG_MAX_BYTES: Max log file size before rotation (default: 10MB)
        LOG_BACKUP_COUNT: Number of backup files to keep (default: 5)

    Example .env:
        LOG_LEVEL=DEBUG
        LOG_FILE=logs/transfer_kit.log
    """
    log_file: str = field(default_factory=lambda: _get_env("LOG_FILE", ""))
    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: _get_env(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    console_output: bool = field(default_factory=lambda: _get_env_bool("LOG_CONSOLE", True))
    max_bytes: int = field(default_factory=lambda: _get_env_int("LOG_MAX_BYTES", 10 * 1024 * 1024))  # 10MB
    backup_count: int = field(default_factory=lambda: _get_env_int("LOG_BACKUP_COUNT", 5))

    @property
    def level(self) -> int:
        """Get numeric log level"""
        return getattr(logging, self.log_level.upper(), logging.INFO)


@dataclass
class Config:
    """
    Main configuration container

    Loads all settings from environment variables and .env file.

    Usage:
        from transfer_kit.config import config

        print(config.solana.devnet_rpc_url)
        print(config.balances_api.base_url)
    """
    rpc: RpcConfig = field(default_factory=RpcConfig)
    solana: SolanaConfig = field(default_factory=SolanaConfig)
    evm: EVMConfig = field(default_factory=EVMConfig)
    balances_api: BalancesApiConfig = field(default_factory=BalancesApiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def reload(cls) -> "Config":
        """Reload configuration from environment"""
        _load_env_file()
        return cls()


# Global config instance
config = Config()


def get_config() -> Config:
    """Get global configuration instance"""
    return config


def reload_config() -> Config:
    """Reload and return new configuration"""
    global config
    config = Config.reload()
    return config


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "transfer_kit",
) -> logging.Logger:
    """
    Set up logging based on configuration.

    Creates handlers for file and/or console output with optional rotation.
    The log file directory is created automatically if it doesn't exist.

    Args:
        log_config: Logging configuration (uses global config if None)
        logger_name: Name of the logger to configure (default: transfer_kit)

    Returns:
        Configured logger instance
    """
    if log_config is None:
        log_config = config.logging

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)

    # Close before removing to flush buffers and release file handles
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(log_config.log_format)

    handlers: List[logging.Handler] = []

    if log_config.log_file:
        from logging.handlers import RotatingFileHandler

        log_path = Path(log_config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_config.log_file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding='utf-8',
        )
        file_handler.setLevel(log_config.level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if log_config.console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_config.level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    for handler in handlers:
        logger.addHandler(handler)

    # Child loggers inherit handlers from parent, only the level is set here
    for name in [
        f"{logger_name}.infra",
        f"{logger_name}.modules",
        f"{logger_name}.protocols",
    ]:
        logging.getLogger(name).setLevel(log_config.level)

    if log_config.log_file:
        logger.info(f"Logging initialized: file={log_config.log_file}, level={log_config.log_level}")

    return logger


def enable_file_logging(
    log_file: Optional[str] = None,
    level: str = "INFO",
    console: bool = True,
) -> logging.Logger:
    """
    Quick setup for file logging.

    Args:
        log_file: Path to log file (defaults to transfer_kit/log/transfer_kit_<timestamp>.log)
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        console: Also output to console

    Returns:
        Configured logger
    """
    if log_file is None:
        log_file = config.logging.log_file or _get_default_log_path()

    log_config = LoggingConfig(
        log_file=log_file,
        log_level=level,
        console_output=console,
    )
    return setup_logging(log_config)
