"""Google Drive v3 REST client: folder listings, moves and exports."""

import logging
from typing import Any, Protocol

import requests
from pydantic import BaseModel, ConfigDict, Field

from config import DRIVE_API_BASE, DRIVE_DRAFTS_FOLDER_ID, DRIVE_FINALS_FOLDER_ID, DRIVE_TIMEOUT
from richtext.errors import RemoteError
from richtext.importer import ExportFormat

logger = logging.getLogger(__name__)

_FILE_FIELDS = "id, name, mimeType, webViewLink, owners"
_EXPORT_MIME_TYPES: dict[str, str] = {
    "zip": "application/zip",
    "html": "text/html",
}


class TokenProvider(Protocol):
    def token(self) -> str: ...


class DriveFile(BaseModel):
    """A Drive document as shown to editors."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    mime_type: str = Field(alias="mimeType")
    web_view_link: str = Field(alias="webViewLink")
    author_name: str = Field(alias="authorName")
    author_email: str = Field(alias="authorEmail")
    author_picture: str = Field(alias="authorPicture")

    @classmethod
    def from_resource(cls, resource: dict[str, Any]) -> "DriveFile":
        """Build from a Drive ``files`` resource, using its last owner as author."""
        try:
            owner = resource["owners"][-1]
            return cls(
                id=resource["id"],
                name=resource["name"],
                mimeType=resource["mimeType"],
                webViewLink=resource["webViewLink"],
                authorName=owner["displayName"],
                authorEmail=owner["emailAddress"],
                authorPicture=owner["photoLink"],
            )
        except (KeyError, IndexError, TypeError) as e:
            raise RemoteError("An error occurred while fetching Drive data") from e


class DriveClient:
    """Thin wrapper over the Drive v3 ``files`` endpoints."""

    def __init__(
        self,
        credentials: TokenProvider,
        api_base: str = DRIVE_API_BASE,
        session: requests.Session | None = None,
    ) -> None:
        self.credentials = credentials
        self.api_base = api_base.rstrip("/")
        self._session = session or requests.Session()

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        headers = {"Authorization": f"Bearer {self.credentials.token()}"}
        url = f"{self.api_base}{path}"
        try:
            resp = self._session.request(method, url, headers=headers, timeout=DRIVE_TIMEOUT, **kwargs)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error("Drive %s %s failed: %s", method, path, e)
            raise RemoteError(f"Drive request failed: {e}") from e
        return resp

    def _json(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        resp = self._request(method, path, **kwargs)
        try:
            data = resp.json()
        except ValueError as e:
            raise RemoteError("Drive API returned non-JSON response") from e
        if not isinstance(data, dict):
            raise RemoteError("Drive API returned unexpected result")
        return data

    # ------------------------------------------------------------------
    # Folders
    # ------------------------------------------------------------------

    def list_folder(self, folder_id: str) -> list[DriveFile]:
        """All files directly inside a folder, following pagination."""
        params: dict[str, Any] = {
            "q": f"'{folder_id}' in parents",
            "fields": f"nextPageToken, files({_FILE_FIELDS})",
        }
        files: list[DriveFile] = []
        while True:
            data = self._json("GET", "/files", params=dict(params))
            files.extend(DriveFile.from_resource(f) for f in data.get("files", []))
            next_page = data.get("nextPageToken")
            if not next_page:
                break
            params["pageToken"] = next_page

        logger.info("Listed %d files in Drive folder %s", len(files), folder_id)
        return files

    def list_drafts(self) -> list[DriveFile]:
        return self.list_folder(DRIVE_DRAFTS_FOLDER_ID)

    def list_finals(self) -> list[DriveFile]:
        return self.list_folder(DRIVE_FINALS_FOLDER_ID)

    def move_file(self, file_id: str, dest_folder_id: str) -> DriveFile:
        """Move a file out of all its current parents into ``dest_folder_id``."""
        current = self._json("GET", f"/files/{file_id}", params={"fields": "parents"})
        parents = current.get("parents")
        if not isinstance(parents, list):
            raise RemoteError("Drive API returned unexpected result")

        updated = self._json(
            "PATCH",
            f"/files/{file_id}",
            params={
                "addParents": dest_folder_id,
                "removeParents": ",".join(parents),
                "fields": _FILE_FIELDS,
            },
            json={},
        )
        logger.info("Moved Drive file %s to folder %s", file_id, dest_folder_id)
        return DriveFile.from_resource(updated)

    def move_to_final(self, file_id: str) -> DriveFile:
        return self.move_file(file_id, DRIVE_FINALS_FOLDER_ID)

    def move_to_draft(self, file_id: str) -> DriveFile:
        return self.move_file(file_id, DRIVE_DRAFTS_FOLDER_ID)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self, document_id: str, export_format: ExportFormat) -> bytes:
        """Download a Google Doc converted to ``zip`` or ``html``."""
        mime_type = _EXPORT_MIME_TYPES.get(export_format)
        if mime_type is None:
            raise ValueError(f"Unsupported export format: {export_format!r}")

        resp = self._request("GET", f"/files/{document_id}/export", params={"mimeType": mime_type})
        logger.debug("Exported document %s as %s (%d bytes)", document_id, mime_type, len(resp.content))
        return resp.content
