"""Error taxonomy for project discovery.

Fatal errors (``ListError``, ``AncestryLookupError``) abort the run.
Cache errors (``CacheLoadError``, ``CacheSaveError``) are downgraded to
warnings by the service layer and never change the filtered project list.
"""

from __future__ import annotations


class OrgKubectlError(Exception):
    """Base class for all org-kubectl errors."""


class AuthError(OrgKubectlError):
    """Application-default credentials could not be obtained."""


class ListError(OrgKubectlError):
    """Project enumeration failed. No partial project list is kept."""


class AncestryLookupError(OrgKubectlError):
    """A remote ancestry query failed for one project."""

    def __init__(self, project_id: str, message: str) -> None:
        super().__init__(message)
        self.project_id = project_id


class ResolutionCancelledError(AncestryLookupError):
    """Resolution was cancelled by the caller or ran past its timeout."""

    def __init__(self, message: str = "ancestry resolution cancelled") -> None:
        super().__init__("", message)


class CacheLoadError(OrgKubectlError):
    """The cache file exists but could not be read or decoded."""


class CacheSaveError(OrgKubectlError):
    """The cache file could not be written."""
