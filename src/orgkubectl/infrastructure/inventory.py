"""Cloud resource inventory client — Cloud Resource Manager v1.

Wraps the discovery-based ``googleapiclient`` service for the two calls
project discovery needs: paginated project listing and per-project
ancestry lookup. The service object is not thread-safe, so each thread
builds its own from the shared credentials.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Protocol

from orgkubectl.domain.errors import AncestryLookupError, AuthError, ListError
from orgkubectl.domain.types import ProjectId, ResourceId

if TYPE_CHECKING:
    from google.auth.credentials import Credentials

logger = logging.getLogger(__name__)

CLOUD_PLATFORM_READ_ONLY = "https://www.googleapis.com/auth/cloud-platform.read-only"


class InventoryClient(Protocol):
    """Minimum surface of the resource-hierarchy API used for discovery."""

    def list_projects(self) -> list[ProjectId]: ...

    def get_ancestry(self, project_id: ProjectId) -> list[ResourceId]: ...


def default_credentials() -> Credentials:
    """Application-default credentials with the read-only platform scope."""
    import google.auth
    from google.auth.exceptions import DefaultCredentialsError

    try:
        credentials, _project = google.auth.default(scopes=[CLOUD_PLATFORM_READ_ONLY])
    except DefaultCredentialsError as exc:
        raise AuthError(f"could not authenticate to google: {exc}") from exc
    return credentials


class GoogleInventoryClient:
    """Cloud Resource Manager client backed by ``googleapiclient``.

    Parameters:
        credentials: Google credentials; defaults to application-default.
        num_retries: Retries per request for transient HTTP failures.
        page_size: Projects requested per page.
    """

    def __init__(
        self,
        credentials: Credentials | None = None,
        *,
        num_retries: int = 3,
        page_size: int = 500,
    ) -> None:
        self._credentials = credentials if credentials is not None else default_credentials()
        self._num_retries = num_retries
        self._page_size = page_size
        self._local = threading.local()

    def _projects(self) -> Any:
        """Per-thread ``projects()`` resource."""
        service = getattr(self._local, "service", None)
        if service is None:
            from googleapiclient.discovery import build

            service = build(
                "cloudresourcemanager",
                "v1",
                credentials=self._credentials,
                cache_discovery=False,
            )
            self._local.service = service
        return service.projects()

    def list_projects(self) -> list[ProjectId]:
        """Every project id visible to the credentials, across all pages.

        All-or-nothing: a failure on any page raises :class:`ListError`
        and discards what was already collected.
        """
        projects: list[ProjectId] = []
        try:
            resource = self._projects()
            request = resource.list(pageSize=self._page_size)
            page = 0
            while request is not None:
                response = request.execute(num_retries=self._num_retries)
                page += 1
                for project in response.get("projects", []):
                    projects.append(project["projectId"])
                logger.debug("Listed page %d (%d projects so far)", page, len(projects))
                request = resource.list_next(previous_request=request, previous_response=response)
        except Exception as exc:
            raise ListError(f"could not list projects: {exc}") from exc
        return projects

    def get_ancestry(self, project_id: ProjectId) -> list[ResourceId]:
        """Ancestor resource ids of *project_id*, in response order."""
        try:
            response = (
                self._projects()
                .getAncestry(projectId=project_id, body={})
                .execute(num_retries=self._num_retries)
            )
        except Exception as exc:
            raise AncestryLookupError(
                project_id, f"could not get ancestry for {project_id}: {exc}"
            ) from exc
        return parse_ancestry(response)


def parse_ancestry(response: dict[str, Any]) -> list[ResourceId]:
    """Extract ``resourceId.id`` values from a ``getAncestry`` response.

    Examples:
        >>> parse_ancestry({"ancestor": [{"resourceId": {"type": "organization", "id": "1"}}]})
        ['1']
        >>> parse_ancestry({})
        []
    """
    return [str(entry["resourceId"]["id"]) for entry in response.get("ancestor", [])]
