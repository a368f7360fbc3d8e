"""Application configuration.

``AppConfig`` is a frozen dataclass. ``debug`` and ``template_dir`` default
to the ``DEBUG`` and ``TEMPLATES`` environment variables; ``from_env()``
reads the rest from ``SIMPLEVC_*`` variables.
"""

from dataclasses import dataclass, field
from pathlib import Path

from simplevc.env import env


def _default_debug() -> bool:
    return env("DEBUG", False) is True


def _default_template_dir() -> str:
    return str(env("TEMPLATES", "templates"))


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    ``debug`` and ``template_dir`` default to the ``DEBUG`` and ``TEMPLATES``
    environment variables at construction time. Override what you need::

        config = AppConfig(debug=True, template_dir="views", secret_key="s3cr3t")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = field(default_factory=_default_debug)

    # Templates
    template_dir: str | Path = field(default_factory=_default_template_dir)
    autoescape: bool = True

    # Routes file used when App() is given no RouteCollection
    routes_file: str | Path = "config/routes.py"

    # Sessions (an empty secret key disables them)
    secret_key: str = ""
    session_cookie: str = "simplevc_session"
    session_max_age: int = 86400  # 24 hours

    # Logging
    log_level: str = "warning"

    @classmethod
    def from_env(cls) -> AppConfig:
        """Build a config from ``SIMPLEVC_*`` environment variables.

        ``DEBUG`` and ``TEMPLATES`` are read unprefixed, matching the
        field defaults. Unset variables keep the dataclass defaults.
        """
        overrides: dict[str, object] = {}
        for name, key in (
            ("host", "SIMPLEVC_HOST"),
            ("routes_file", "SIMPLEVC_ROUTES"),
            ("secret_key", "SIMPLEVC_SECRET_KEY"),
            ("session_cookie", "SIMPLEVC_SESSION_COOKIE"),
            ("log_level", "SIMPLEVC_LOG_LEVEL"),
        ):
            value = env(key)
            if isinstance(value, str):
                overrides[name] = value

        port = env("SIMPLEVC_PORT")
        if isinstance(port, str) and port.isdigit():
            overrides["port"] = int(port)

        autoescape = env("SIMPLEVC_AUTOESCAPE")
        if isinstance(autoescape, bool):
            overrides["autoescape"] = autoescape

        return cls(**overrides)  # type: ignore[arg-type]
