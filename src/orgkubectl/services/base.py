"""BaseService — shared foundation for org-kubectl services.

Every service receives the frozen :class:`OrgSettings` at construction and,
optionally, an inventory client. Without one, the Google client is built on
first use so commands that never touch the network (``cache show``) never
need credentials.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from orgkubectl.config.settings import OrgSettings
    from orgkubectl.infrastructure.inventory import InventoryClient

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class ProjectService(BaseService):
            def find_child_projects(self, target: str) -> ServiceResult:
                client = self._inventory()
                ...
    """

    def __init__(self, settings: OrgSettings, client: InventoryClient | None = None) -> None:
        self._settings = settings
        self._client = client

    def _inventory(self) -> InventoryClient:
        """The injected client, or a lazily built Google client.

        Raises:
            AuthError: application-default credentials are unavailable.
        """
        if self._client is None:
            from orgkubectl.infrastructure.inventory import GoogleInventoryClient

            logger.debug("Building Cloud Resource Manager client")
            self._client = GoogleInventoryClient(
                num_retries=self._settings.inventory.num_retries,
                page_size=self._settings.inventory.page_size,
            )
        return self._client
