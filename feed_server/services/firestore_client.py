"""
Async Firestore client construction shared by the Firestore-backed services.

Credentials come from a service account JSON file; the project id is taken
from config or, failing that, from the credentials file itself.
"""

import json
from pathlib import Path
from typing import Optional, Union

from google.cloud.firestore import AsyncClient
from google.oauth2 import service_account


def _project_id_from_credentials_file(credentials_path: Union[Path, str]) -> Optional[str]:
    """Read project_id from a Google service account JSON file if present."""
    path = Path(credentials_path)
    if not path.is_file():
        return None
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return None
    return data.get("project_id") or data.get("projectId")


def create_async_client(
    project_id: Optional[str] = None,
    credentials_path: Optional[Union[Path, str]] = None,
) -> AsyncClient:
    """AsyncClient from a service account file, or application default credentials."""
    if not credentials_path:
        return AsyncClient(project=project_id)
    resolved = str(Path(credentials_path).resolve())
    creds = service_account.Credentials.from_service_account_file(resolved)
    proj = project_id or _project_id_from_credentials_file(resolved)
    return AsyncClient(project=proj, credentials=creds)


def doc_id(value: str) -> str:
    """Firestore document ids cannot contain '/'."""
    return value.replace("/", "%2F")
