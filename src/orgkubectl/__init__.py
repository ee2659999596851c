"""org-kubectl: find cloud projects beneath an organization or folder."""

__version__ = "0.1.0"
