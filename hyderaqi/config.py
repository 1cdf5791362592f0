"""
Configuration module for the HyderAQI dashboard core.

Settings are read from environment variables, after loading a ``.env`` file
from the working directory if one exists. The API key is a precondition for
Gemini mode; this package never validates it beyond checking presence.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

LLM_MODES = ("mock", "gemini")
DEFAULT_MODEL = "gemini-3-flash-preview"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Settings:
    """
    Runtime configuration.

    Attributes:
        api_key: Gemini API key, or None
        llm_mode: Requested LLM mode ("mock" or "gemini")
        model: Gemini model name
        city: City all stations and searches are scoped to
        region: Country/region appended to discovery prompts
        log_level: Logging level name
        log_dir: Directory for the dashboard activity log
    """

    api_key: Optional[str] = None
    llm_mode: str = "mock"
    model: str = DEFAULT_MODEL
    city: str = "Hyderabad"
    region: str = "India"
    log_level: str = "INFO"
    log_dir: Path = Path("logs")

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """
        Builds Settings from the process environment.

        Args:
            load_env_file: If True, load ``.env`` first (existing variables win)

        Returns:
            Settings with defaults for anything unset. An unknown
            HYDERAQI_LLM_MODE value is kept as "mock".
        """
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True))

        mode = os.getenv("HYDERAQI_LLM_MODE", "").strip().lower()
        return cls(
            api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None,
            llm_mode=mode if mode in LLM_MODES else "mock",
            model=os.getenv("HYDERAQI_MODEL") or DEFAULT_MODEL,
            city=os.getenv("HYDERAQI_CITY") or "Hyderabad",
            region=os.getenv("HYDERAQI_REGION") or "India",
            log_level=(os.getenv("HYDERAQI_LOG_LEVEL") or "INFO").upper(),
            log_dir=Path(os.getenv("HYDERAQI_LOG_DIR") or "logs"),
        )

    @property
    def discovery_scope(self) -> str:
        """City and region as used in discovery prompts, e.g. "Hyderabad, India"."""
        return f"{self.city}, {self.region}" if self.region else self.city


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Installs a console handler on the package logger.

    Safe to call more than once; the handler is only added the first time.
    """
    settings = settings or Settings.from_env()
    package_logger = logging.getLogger("hyderaqi")
    package_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))
    if not any(getattr(h, "_hyderaqi_console", False) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._hyderaqi_console = True
        package_logger.addHandler(handler)


def activity_logger(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Returns the dashboard activity logger, writing to ``<log_dir>/dashboard_activity.log``.

    The log directory is created if needed.
    """
    settings = settings or Settings.from_env()
    logger = logging.getLogger("hyderaqi.activity")
    log_file = Path(settings.log_dir) / "dashboard_activity.log"
    target = os.path.abspath(log_file)
    if not any(isinstance(h, logging.FileHandler) and h.baseFilename == target
               for h in logger.handlers):
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter("[%(asctime)s] %(message)s", "%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    return logger
