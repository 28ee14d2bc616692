"""Upstream project and GitHub API constants."""

TOOL_NAME = "utpm"

# Upstream repository
UTPM_OWNER = "typst-community"
UTPM_REPO = "utpm"

# GitHub API URL structure
GITHUB_API_BASE = "https://api.github.com"
GITHUB_REPOS_PATH = "repos"
RELEASES_PATH = "releases"
GITHUB_API_VERSION = "2022-11-28"
RELEASES_PER_PAGE = 100

RELEASE_DOWNLOAD_BASE = (
    f"https://github.com/{UTPM_OWNER}/{UTPM_REPO}/releases/download"
)
DOWNLOAD_URL_TEMPLATE = "{base}/v{version}/{tool}-{target}{extension}"

USER_AGENT = "setup-utpm"

DEFAULT_VERSION = "latest"
