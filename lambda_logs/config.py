"""
Configuration Module - Application settings and AWS profiles

Handles:
- Environment/.env driven application settings
- Logging setup (file handler under the log directory)
- AWS profile discovery from the shared config and credentials files
"""
import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from lambda_logs.errors import ConfigurationError

DEFAULT_REGION = "us-east-1"
LOGGER_NAME = "lambda_logs"


@dataclass(frozen=True)
class Profile:
    """An AWS credential profile and the region its calls go to"""
    name: str
    region: str

    def __str__(self) -> str:
        return f"{self.name} ({self.region})"


@dataclass
class AppSettings:
    """Runtime settings, read from the environment"""
    log_dir: Path
    log_level: str = "INFO"
    aws_cli: str = "aws"
    timeout: float = 60.0
    config_file: Path = Path.home() / ".aws" / "config"
    credentials_file: Path = Path.home() / ".aws" / "credentials"
    default_region: Optional[str] = None

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "AppSettings":
        """
        Build settings from environment variables (after loading .env)

        Args:
            env_file: Explicit .env file; defaults to searching from the cwd

        Raises:
            ConfigurationError: If a numeric setting is malformed
        """
        load_dotenv(env_file)

        timeout_raw = os.getenv("LAMBDA_LOGS_TIMEOUT", "60")
        try:
            timeout = float(timeout_raw)
        except ValueError:
            raise ConfigurationError(f"LAMBDA_LOGS_TIMEOUT must be a number, got {timeout_raw!r}")

        aws_dir = Path.home() / ".aws"
        return cls(
            log_dir=Path(os.getenv("LAMBDA_LOGS_LOG_DIR", "app_log")),
            log_level=os.getenv("LAMBDA_LOGS_LOG_LEVEL", "INFO").upper(),
            aws_cli=os.getenv("LAMBDA_LOGS_AWS_CLI", "aws"),
            timeout=timeout,
            config_file=Path(os.getenv("AWS_CONFIG_FILE", str(aws_dir / "config"))).expanduser(),
            credentials_file=Path(
                os.getenv("AWS_SHARED_CREDENTIALS_FILE", str(aws_dir / "credentials"))
            ).expanduser(),
            default_region=os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION"),
        )


def setup_logging(settings: AppSettings) -> logging.Logger:
    """
    Attach a file handler to the application logger

    The terminal belongs to the UI, so everything goes to
    ``<log_dir>/lambda_logs.log``.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    # Create file handler if not already exists
    if not logger.handlers:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        log_file = settings.log_dir / "lambda_logs.log"

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logger.level)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def _read_ini(path: Path) -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read(path, encoding="utf-8")
    except (configparser.Error, OSError) as e:
        raise ConfigurationError(f"Could not parse {path}: {e}")
    return parser


def load_profiles(settings: AppSettings) -> List[Profile]:
    """
    Discover AWS profiles

    Profiles from the config file come first, in file order, followed by
    profiles that only appear in the credentials file.

    Returns:
        Profiles with their resolved region

    Raises:
        ConfigurationError: If neither file exists or no profile is defined
    """
    logger = logging.getLogger(__name__)

    if not settings.config_file.exists() and not settings.credentials_file.exists():
        raise ConfigurationError(
            f"No AWS configuration found (looked for {settings.config_file} "
            f"and {settings.credentials_file})"
        )

    regions: Dict[str, Optional[str]] = {}

    if settings.config_file.exists():
        config = _read_ini(settings.config_file)
        for section in config.sections():
            if section == "default":
                name = "default"
            elif section.startswith("profile "):
                name = section[len("profile "):].strip()
            else:
                # sso-session, services, ...
                continue
            regions[name] = config.get(section, "region", fallback=None)

    if settings.credentials_file.exists():
        credentials = _read_ini(settings.credentials_file)
        for section in credentials.sections():
            if regions.get(section) is None:
                regions[section] = credentials.get(section, "region", fallback=None)

    if not regions:
        raise ConfigurationError("No AWS profiles are defined")

    fallback = settings.default_region or DEFAULT_REGION
    profiles = []
    for name, region in regions.items():
        if not region:
            logger.warning(f"Profile {name} has no region, using {fallback}")
        profiles.append(Profile(name=name, region=region or fallback))

    logger.info(f"Loaded {len(profiles)} AWS profiles")
    return profiles
