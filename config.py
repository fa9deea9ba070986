# config.py
import os
from dataclasses import dataclass
from typing import List, Mapping, NamedTuple, Optional, Tuple

from dotenv import load_dotenv

DEFAULT_RANGE = "A1:D4321"
DEFAULT_SCOPES = ("https://www.googleapis.com/auth/spreadsheets",)
DEFAULT_PORT = 3001


class ConfigurationError(Exception):
    pass


class ServiceAccount(NamedTuple):
    project_id: str
    client_email: str
    private_key: str
    scopes: Tuple[str, ...]


def _clean(value: Optional[str]) -> Optional[str]:
    """Return None for unset or blank values, the value unchanged otherwise."""
    if value is None or value.strip() == "":
        return None
    return value


def _split(value: Optional[str], default: Tuple[str, ...]) -> Tuple[str, ...]:
    value = _clean(value)
    if value is None:
        return default
    parts = tuple(p.strip() for p in value.split(",") if p.strip())
    return parts or default


def normalize_private_key(raw: Optional[str]) -> Optional[str]:
    # keys pasted into .env files carry literal "\n" sequences
    raw = _clean(raw)
    if raw is None:
        return None
    return raw.replace("\\n", "\n")


@dataclass(frozen=True)
class Settings:
    project_id: Optional[str] = None
    client_email: Optional[str] = None
    private_key: Optional[str] = None
    spreadsheet_id: Optional[str] = None
    sheet_range: str = DEFAULT_RANGE
    scopes: Tuple[str, ...] = DEFAULT_SCOPES
    port: int = DEFAULT_PORT
    cors_origins: Tuple[str, ...] = ("*",)

    def missing(self) -> List[str]:
        required = [
            ("GOOGLE_PROJECT_ID", self.project_id),
            ("GOOGLE_CLIENT_EMAIL", self.client_email),
            ("GOOGLE_PRIVATE_KEY", self.private_key),
            ("GOOGLE_SHEET_ID", self.spreadsheet_id),
        ]
        return [name for name, value in required if _clean(value) is None]

    @property
    def configured(self) -> bool:
        return not self.missing()

    def service_account(self) -> ServiceAccount:
        """Return the service-account identity, or raise ConfigurationError
        naming every required variable that is unset or blank."""
        missing = self.missing()
        if missing:
            raise ConfigurationError(f"missing {', '.join(missing)}")
        return ServiceAccount(
            project_id=self.project_id,
            client_email=self.client_email,
            private_key=self.private_key,
            scopes=self.scopes,
        )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the process environment (after loading .env).

    Passing ``environ`` skips .env loading and reads only that mapping.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    port_raw = _clean(environ.get("PORT"))
    try:
        port = int(port_raw) if port_raw is not None else DEFAULT_PORT
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {port_raw!r}")

    return Settings(
        project_id=_clean(environ.get("GOOGLE_PROJECT_ID")),
        client_email=_clean(environ.get("GOOGLE_CLIENT_EMAIL")),
        private_key=normalize_private_key(environ.get("GOOGLE_PRIVATE_KEY")),
        spreadsheet_id=_clean(environ.get("GOOGLE_SHEET_ID")),
        sheet_range=_clean(environ.get("SHEET_RANGE")) or DEFAULT_RANGE,
        scopes=_split(environ.get("GOOGLE_SCOPES"), DEFAULT_SCOPES),
        port=port,
        cors_origins=_split(environ.get("CORS_ORIGINS"), ("*",)),
    )
