"""End-to-end tests for the assembled frontend server."""

import os
from pathlib import Path

import pytest

from portalserve.app import App
from portalserve.config import AppConfig
from portalserve.errors import ConfigurationError
from portalserve.middleware import clean_urls
from portalserve.portal import create_app
from portalserve.testing import TestClient

SIGN_IN = "<h1>Sign in</h1>"


class TestCleanURLs:
    async def test_pages_fallback(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/dashboard")
            assert response.status == 200
            assert response.text == "<h1>Dashboard</h1>"
            assert response.content_type.startswith("text/html")

    async def test_root_file_preferred_over_pages(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/about")
            assert response.text == "<h1>Root About</h1>"

    async def test_full_path_under_pages(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/pages/accounts")
            assert response.status == 200
            assert response.text == "<h1>Accounts</h1>"

    async def test_nested_directory_primary(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/reports/annual")
            assert response.text == "<h1>Annual</h1>"

    async def test_intermediate_directories_dropped_for_fallback(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/archive/dashboard")
            assert response.status == 200
            assert response.text == "<h1>Dashboard</h1>"

    async def test_sign_in_clean_url(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/pages/uqudo-sign-in")
            assert response.status == 200
            assert response.text == SIGN_IN

    async def test_query_string_ignored_for_resolution(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/dashboard?tab=alerts")
            assert response.text == "<h1>Dashboard</h1>"

    async def test_cache_control(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/dashboard")
            assert response.header("cache-control") == "public, max-age=0"


class TestStaticPassthrough:
    async def test_asset_served_untouched(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/assets/style.css")
            assert response.status == 200
            assert "text/css" in response.content_type
            assert response.text == "body { color: red; }"

    async def test_extensionless_asset_served_by_assets(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/assets/LICENSE")
            assert response.status == 200
            assert response.text == "MIT"

    async def test_html_with_extension(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/pages/dashboard.html")
            assert response.status == 200
            assert response.text == "<h1>Dashboard</h1>"

    async def test_pages_directory_redirects_to_slash(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/pages/docs")
            assert response.status == 301
            assert response.header("location") == "/pages/docs/"

    async def test_pages_directory_index(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/pages/docs/")
            assert response.status == 200
            assert response.text == "<h1>Docs</h1>"


class TestRootRedirect:
    async def test_redirects_to_sign_in(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 302
            assert response.header("location") == "/pages/uqudo-sign-in"

    async def test_redirects_even_if_sign_in_missing(self, site_root: Path) -> None:
        (site_root / "pages" / "uqudo-sign-in.html").unlink()
        async with TestClient(create_app(AppConfig(root_dir=site_root))) as client:
            response = await client.get("/")
            assert response.status == 302

    async def test_redirects_even_if_index_html_exists(self, site_root: Path) -> None:
        (site_root / "index.html").write_text("<h1>Index</h1>")
        async with TestClient(create_app(AppConfig(root_dir=site_root))) as client:
            response = await client.get("/")
            assert response.status == 302

    async def test_post_root_not_allowed(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.post("/")
            assert response.status == 405
            assert response.header("allow") == "GET, HEAD"

    async def test_custom_sign_in_page(self, site_root: Path) -> None:
        config = AppConfig(root_dir=site_root, sign_in_page="dashboard")
        async with TestClient(create_app(config)) as client:
            response = await client.get("/")
            assert response.header("location") == "/pages/dashboard"


class TestSoftNotFound:
    async def test_unresolved_page(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/reports/monthly")
            assert response.status == 404
            assert response.text == SIGN_IN
            assert response.content_type.startswith("text/html")

    async def test_missing_file_with_extension(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/missing.css")
            assert response.status == 404
            assert response.text == SIGN_IN

    async def test_missing_asset(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/assets/missing.js")
            assert response.status == 404
            assert response.text == SIGN_IN

    async def test_post_to_page_not_resolved(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.post("/dashboard")
            assert response.status == 404
            assert response.text == SIGN_IN

    async def test_plain_text_when_sign_in_missing(self, site_root: Path) -> None:
        (site_root / "pages" / "uqudo-sign-in.html").unlink()
        async with TestClient(create_app(AppConfig(root_dir=site_root))) as client:
            response = await client.get("/nowhere")
            assert response.status == 404
            assert response.text == "Not Found"

    async def test_traversal_does_not_escape_root(self, site_root: Path) -> None:
        (site_root.parent / "secret.html").write_text("top secret")
        async with TestClient(create_app(AppConfig(root_dir=site_root))) as client:
            response = await client.get("/../secret")
            assert response.status == 404
            assert "top secret" not in response.text


class TestUnnameablePaths:
    @pytest.mark.parametrize(
        "path",
        [
            "/" + "a" * 300,
            "/dash\x00board",
            "/assets/" + "a" * 300 + ".js",
            "/assets/style.css/foo",
            "/pages/dashboard.html/x",
        ],
    )
    async def test_soft_not_found(self, app: App, path: str) -> None:
        async with TestClient(app) as client:
            response = await client.get(path)
            assert response.status == 404
            assert response.text == SIGN_IN


class TestHead:
    async def test_head_page_has_length_but_no_body(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.head("/dashboard")
            assert response.status == 200
            assert response.body == b""
            assert response.header("content-length") == str(len("<h1>Dashboard</h1>"))

    async def test_head_unresolved_is_soft_not_found(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.head("/reports/monthly")
            assert response.status == 404
            assert response.body == b""
            assert response.header("content-length") == str(len(SIGN_IN))

    async def test_head_root_redirects(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.head("/")
            assert response.status == 302


class TestIOFaults:
    async def test_probe_failure_is_500_without_paths(
        self, app: App, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def denied(path: Path) -> bool:
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr(clean_urls, "is_file", denied)

        async with TestClient(app) as client:
            response = await client.get("/dashboard")
            assert response.status == 500
            assert response.text == "Internal Server Error"
            assert "site" not in response.text

    @pytest.mark.skipif(
        hasattr(os, "geteuid") and os.geteuid() == 0,
        reason="root ignores directory permissions",
    )
    async def test_unreadable_pages_dir_is_500(self, app: App, site_root: Path) -> None:
        pages = site_root / "pages"
        async with TestClient(app) as client:
            pages.chmod(0o000)
            try:
                response = await client.get("/dashboard")
            finally:
                pages.chmod(0o755)
            assert response.status == 500
            assert response.text == "Internal Server Error"


class TestCreateApp:
    def test_missing_root_is_configuration_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not a directory"):
            create_app(AppConfig(root_dir=tmp_path / "nope"))

    async def test_missing_layout_logs_warnings(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level("WARNING", logger="portalserve.server")
        async with TestClient(create_app(AppConfig(root_dir=tmp_path))):
            pass
        assert "assets" in caplog.text
        assert "Sign-in page" in caplog.text
