from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from setup_utpm.config import RunnerEnvironment
from setup_utpm.logging import configure_logging

RELEASES_ROUTE = "/repos/typst-community/utpm/releases"


@pytest.fixture(scope="session", autouse=True)
def structured_logging():
    """Configure logging once so every logger renders workflow commands"""
    configure_logging("DEBUG")


@dataclass
class FakeGitHub:
    """In-process stand-in for the GitHub releases API and download host"""
    base_url: str = ""
    release_pages: List[List[dict]] = field(default_factory=lambda: [[]])
    release_status: int = 200
    release_body: Optional[str] = None
    assets: Dict[str, bytes] = field(default_factory=dict)
    requests: List[dict] = field(default_factory=list)

    @property
    def download_base(self) -> str:
        return f"{self.base_url}/download"

    def set_releases(self, *tags: str) -> None:
        self.release_pages = [[{"tag_name": tag} for tag in tags]]

    def downloads(self) -> List[str]:
        return [r["path"] for r in self.requests if r["path"].startswith("/download/")]

    def runner(self, tmp_path: Path) -> RunnerEnvironment:
        return RunnerEnvironment(
            tool_cache=tmp_path / "toolcache",
            temp=tmp_path / "temp",
            output_file=tmp_path / "github_output",
            path_file=tmp_path / "github_path",
            api_url=self.base_url,
        )

    async def handle(self, request: web.Request) -> web.StreamResponse:
        self.requests.append({
            "path": request.path,
            "query": dict(request.query),
            "authorization": request.headers.get("Authorization"),
        })

        if request.path == RELEASES_ROUTE:
            if self.release_body is not None:
                return web.Response(status=self.release_status, text=self.release_body)

            page = int(request.query.get("page", "1"))
            headers = {}
            if page < len(self.release_pages):
                next_url = f"{self.base_url}{RELEASES_ROUTE}?per_page=100&page={page + 1}"
                headers["Link"] = f'<{next_url}>; rel="next"'
            return web.json_response(self.release_pages[page - 1], headers=headers)

        if request.path.startswith("/download/"):
            asset = self.assets.get(request.path[len("/download"):])
            if asset is None:
                return web.Response(status=404, text="Not Found")
            return web.Response(body=asset, content_type="application/octet-stream")

        return web.Response(status=404, text="Not Found")


@pytest_asyncio.fixture
async def github():
    """Run a FakeGitHub on a local port for the duration of a test"""
    fake = FakeGitHub()
    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", fake.handle)

    server = TestServer(app)
    await server.start_server()
    fake.base_url = f"http://{server.host}:{server.port}"
    try:
        yield fake
    finally:
        await server.close()
