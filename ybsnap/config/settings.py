"""Environment settings."""

import os


class Settings:
    """Command line defaults taken from the environment."""

    @staticmethod
    def get(key: str, default: str = "") -> str:
        """Value of an environment variable, default when unset or empty."""
        return os.getenv(key) or default

    @staticmethod
    def config_path() -> str:
        """Config file named by YBSNAP_CONFIG, "" when unset."""
        return Settings.get("YBSNAP_CONFIG")

    @staticmethod
    def log_level() -> str:
        return Settings.get("LOG_LEVEL").upper()
