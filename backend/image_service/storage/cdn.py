"""
jsDelivr mirror URLs for files stored in a GitHub repository.
"""

JSDELIVR_GH_BASE = "https://cdn.jsdelivr.net/gh"


def build_cdn_url(owner: str, repo: str, branch: str, path: str) -> str:
    """
    Map a repository path to its public jsDelivr URL.

    Pure function, no network call.

    Example:
        build_cdn_url("acme", "assets", "main", "images/a.png")
        -> "https://cdn.jsdelivr.net/gh/acme/assets@main/images/a.png"
    """
    return f"{JSDELIVR_GH_BASE}/{owner}/{repo}@{branch}/{path}"
