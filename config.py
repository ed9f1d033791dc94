from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    # HTTP server settings
    host: str = "0.0.0.0"
    port: int = 8000
    cors_enabled: bool = True
    # Standalone Prometheus endpoint (the app also serves /metrics)
    start_metrics_server: bool = False
    metrics_port: int = 9100
    metrics_addr: str = "0.0.0.0"
    # Maximum age in seconds of an ownership message accepted by /submitstar
    submission_window_seconds: int = 300
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="STARLEDGER_", env_file=".env", env_file_encoding="utf-8")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type["Settings"],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment variables take highest priority, then init, dotenv, file secrets
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)


def get_package_version() -> str:
    """
    Returns the version string from setup.py for use in the application.
    """
    import os
    import re

    setup_path = os.path.join(os.path.dirname(__file__), "setup.py")
    version_pattern = re.compile(r'version\s*=\s*[\'"]([^\'"]+)[\'"]')
    try:
        with open(setup_path, "r", encoding="utf-8") as f:
            for line in f:
                match = version_pattern.search(line)
                if match:
                    return match.group(1)
    except OSError:
        pass
    return "0.0.0"
