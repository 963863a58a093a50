"""
Media signing service.

Browsers upload cover images and inline media straight to Cloudinary.
This module signs those direct uploads so the API secret never leaves
the server. The signer is built once at startup from settings and
handed to the upload-auth route through a dependency.
"""

from datetime import UTC, datetime
from typing import Any

from cloudinary.utils import api_sign_request

from app.configs.settings import Settings
from app.errors.media import MediaSigningError


class MediaSigner:
    """
    Sign direct uploads to Cloudinary.

    Attributes:
        cloud_name: Cloudinary cloud name
        api_key: Public API key returned to the client
        folder: Upload folder enforced by the signature
    """

    def __init__(
        self,
        cloud_name: str | None,
        api_key: str | None,
        api_secret: str | None,
        folder: str,
    ) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self._api_secret = api_secret
        self.folder = folder

    @classmethod
    def from_settings(cls, settings: Settings) -> "MediaSigner":
        """Build a signer from application settings."""
        secret = settings.CLOUDINARY_API_SECRET
        return cls(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=secret.get_secret_value() if secret else None,
            folder=settings.CLOUDINARY_UPLOAD_FOLDER,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self._api_secret)

    def sign_upload(self, now: datetime | None = None) -> dict[str, Any]:
        """
        Produce signed parameters for one direct upload.

        Args:
            now: Signing time (defaults to now, UTC)

        Returns:
            dict[str, Any]: ``signature``, ``timestamp``, ``api_key``,
            ``cloud_name`` and ``folder``

        Raises:
            MediaSigningError: If Cloudinary credentials are missing
        """
        if not self.is_configured:
            raise MediaSigningError

        timestamp = int((now or datetime.now(tz=UTC)).timestamp())
        params = {"folder": self.folder, "timestamp": timestamp}
        signature = api_sign_request(params, self._api_secret)

        return {
            "signature": signature,
            "timestamp": timestamp,
            "api_key": self.api_key,
            "cloud_name": self.cloud_name,
            "folder": self.folder,
        }
