"""Shared fixtures: a fake portal frontend on disk and an app serving it."""

from pathlib import Path

import pytest

from portalserve.app import App
from portalserve.config import AppConfig
from portalserve.portal import create_app

SIGN_IN = "<h1>Sign in</h1>"


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Build a site root::

        site/
            about.html
            reports/annual.html
            assets/style.css, app.js, LICENSE
            pages/uqudo-sign-in.html, dashboard.html, about.html, accounts.html
            pages/docs/index.html
    """
    root = tmp_path / "site"
    root.mkdir()

    (root / "about.html").write_text("<h1>Root About</h1>")
    (root / "reports").mkdir()
    (root / "reports" / "annual.html").write_text("<h1>Annual</h1>")

    assets = root / "assets"
    assets.mkdir()
    (assets / "style.css").write_text("body { color: red; }")
    (assets / "app.js").write_text("console.log('portal');")
    (assets / "LICENSE").write_text("MIT")

    pages = root / "pages"
    pages.mkdir()
    (pages / "uqudo-sign-in.html").write_text(SIGN_IN)
    (pages / "dashboard.html").write_text("<h1>Dashboard</h1>")
    (pages / "about.html").write_text("<h1>Pages About</h1>")
    (pages / "accounts.html").write_text("<h1>Accounts</h1>")
    (pages / "docs").mkdir()
    (pages / "docs" / "index.html").write_text("<h1>Docs</h1>")

    return root


@pytest.fixture
def app(site_root: Path) -> App:
    return create_app(AppConfig(root_dir=site_root))
