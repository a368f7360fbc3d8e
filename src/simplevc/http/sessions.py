"""Signed cookie sessions.

Session data is serialized as JSON and signed using ``itsdangerous``.
The dispatcher loads the session from the request cookie before the
controller runs and writes it back onto the response afterwards::

    store = SessionStore(SessionConfig(secret_key="my-secret-key"))
    request.session = store.load(request)
    ...
    response = store.save(response, request.session)

Sessions are signed, not encrypted: never store secrets in them.
"""

from dataclasses import dataclass
from typing import Any

from itsdangerous import BadSignature, URLSafeTimedSerializer

from simplevc.errors import ConfigurationError
from simplevc.http.request import Request
from simplevc.http.response import Response


class Session(dict[str, Any]):
    """A dict that remembers whether it was changed during the request."""

    __slots__ = ("modified",)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.modified = False

    def __setitem__(self, key: str, value: Any) -> None:
        self.modified = True
        super().__setitem__(key, value)

    def __delitem__(self, key: str) -> None:
        self.modified = True
        super().__delitem__(key)

    def clear(self) -> None:
        self.modified = True
        super().clear()

    def pop(self, key: str, *default: Any) -> Any:
        self.modified = True
        return super().pop(key, *default)

    def update(self, *args: Any, **kwargs: Any) -> None:
        self.modified = True
        super().update(*args, **kwargs)

    def setdefault(self, key: str, default: Any = None) -> Any:
        if key not in self:
            self.modified = True
        return super().setdefault(key, default)


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Session store configuration.

    ``secret_key`` is required — sessions are signed, not encrypted.
    """

    secret_key: str
    cookie_name: str = "simplevc_session"
    max_age: int = 86400  # 24 hours
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = True
    samesite: str = "lax"


class SessionStore:
    """Load and save signed cookie sessions."""

    __slots__ = ("_config", "_serializer")

    def __init__(self, config: SessionConfig) -> None:
        if not config.secret_key:
            msg = "SessionConfig.secret_key must not be empty."
            raise ConfigurationError(msg)

        self._config = config
        self._serializer = URLSafeTimedSerializer(config.secret_key, salt="simplevc.session")

    @property
    def config(self) -> SessionConfig:
        return self._config

    def load(self, request: Request) -> Session:
        """Deserialize and verify the session cookie.

        A missing, expired, tampered or malformed cookie yields an
        empty session.
        """
        cookie_value = request.cookies.get(self._config.cookie_name)
        if not cookie_value:
            return Session()

        try:
            data = self._serializer.loads(cookie_value, max_age=self._config.max_age)
        except BadSignature:
            return Session()

        if not isinstance(data, dict):
            return Session()
        return Session(data)

    def save(self, response: Response, session: Session) -> Response:
        """Serialize the session and set the cookie on the response.

        Unchanged sessions leave the response untouched. A cleared session
        deletes the cookie.
        """
        if not session.modified:
            return response

        cfg = self._config
        if not session:
            return response.without_cookie(cfg.cookie_name, path=cfg.path)

        value = self._serializer.dumps(dict(session))
        return response.with_cookie(
            name=cfg.cookie_name,
            value=value,
            max_age=cfg.max_age,
            path=cfg.path,
            domain=cfg.domain,
            secure=cfg.secure,
            httponly=cfg.httponly,
            samesite=cfg.samesite,
        )
