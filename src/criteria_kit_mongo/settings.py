"""
MongoDB connection settings.

Settings are loaded from ``MONGO_*`` environment variables.  A full
``MONGO_URI`` wins; otherwise an Atlas-style SRV URL is assembled from
``MONGO_USER``, ``MONGO_PASS``, ``MONGO_SERVER`` and ``MONGO_DB``.
"""

from __future__ import annotations

from urllib import parse as urlparse

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import MongoConnectionError


def mask_credentials(url: str) -> str:
    """Replace the user and password of a connection URL with asterisks."""
    parts = urlparse.urlsplit(url)
    if parts.username is None and parts.password is None:
        return url
    host = parts.netloc.rpartition("@")[2]
    return urlparse.urlunsplit(parts._replace(netloc=f"*****:*****@{host}"))


class MongoSettings(BaseSettings):
    """
    Attributes:
        uri (str | None): Complete connection string; overrides the parts below.
        user (str | None): Database user.
        password (SecretStr | None): Database password (``MONGO_PASS``).
        server (str | None): Cluster host name.
        db (str | None): Database name; also the default database for
            repositories.
        server_selection_timeout_ms (int): Motor server selection timeout.
        connect_timeout_ms (int): Motor connect timeout.
    """

    model_config = SettingsConfigDict(
        env_prefix="MONGO_", extra="ignore", populate_by_name=True
    )

    uri: str | None = None
    user: str | None = None
    password: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("MONGO_PASS", "MONGO_PASSWORD"),
    )
    server: str | None = None
    db: str | None = None
    server_selection_timeout_ms: int = 5000
    connect_timeout_ms: int = 10000

    @property
    def url(self) -> str:
        if self.uri:
            return self.uri
        if not (self.user and self.password and self.server and self.db):
            raise MongoConnectionError(
                "Missing MongoDB environment variables. Provide MONGO_URI or "
                "MONGO_USER/MONGO_PASS/MONGO_SERVER/MONGO_DB."
            )
        user = urlparse.quote_plus(self.user)
        password = urlparse.quote_plus(self.password.get_secret_value())
        return (
            f"mongodb+srv://{user}:{password}@{self.server}/{self.db}"
            "?retryWrites=true&w=majority"
        )

    @property
    def url_public(self) -> str:
        """The connection URL with credentials masked, safe for logs."""
        return mask_credentials(self.url)

    @property
    def database(self) -> str | None:
        return self.db
