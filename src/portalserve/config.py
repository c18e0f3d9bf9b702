"""Server configuration.

AppConfig is a frozen dataclass, immutable after creation, fixed at
process start, passed explicitly to everything that needs a path.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Server configuration. Immutable after creation.

    All fields have defaults matching the portal frontend layout::

        <root_dir>/
            assets/        served under /assets
            pages/         served under /pages, clean URLs resolved here
            pages/uqudo-sign-in.html

    Override what you need::

        config = AppConfig(root_dir="./frontend", port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False  # single worker + auto-reload
    workers: int = 1

    # Site layout (directories are relative to root_dir)
    root_dir: str | Path = "."
    assets_url: str = "/assets"
    assets_dir: str = "assets"
    pages_url: str = "/pages"
    pages_dir: str = "pages"
    page_suffix: str = ".html"

    # Fallback page: root redirect target and soft-404 body
    sign_in_page: str = "uqudo-sign-in"

    # Responses
    cache_control: str = "public, max-age=0"

    # Logging
    access_log: bool = True
    log_level: str = "info"
    log_format: str = "text"

    @property
    def root_path(self) -> Path:
        """Absolute, symlink-resolved site root."""
        return Path(self.root_dir).resolve()

    @property
    def assets_path(self) -> Path:
        return self.root_path / self.assets_dir

    @property
    def pages_path(self) -> Path:
        return self.root_path / self.pages_dir

    @property
    def sign_in_file(self) -> Path:
        """The document rendered as the soft-404 body."""
        return self.pages_path / f"{self.sign_in_page}{self.page_suffix}"

    @property
    def sign_in_url(self) -> str:
        """Clean URL the root path redirects to."""
        return f"{self.pages_url.rstrip('/')}/{self.sign_in_page}"
