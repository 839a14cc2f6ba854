"""
Storage module for images kept in a GitHub repository.

Files are committed through the GitHub contents API and served
through the jsDelivr CDN mirror of the repository.
"""
from image_service.storage.github_client import GitHubContentsClient, ExistingObject
from image_service.storage.cdn import build_cdn_url

__all__ = ["GitHubContentsClient", "ExistingObject", "build_cdn_url"]
