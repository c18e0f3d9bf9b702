"""Startup banner listing where the portal is reachable."""

from portalserve.config import AppConfig

_RULE = "=" * 60


def discover_pages(config: AppConfig) -> list[str]:
    """Clean URLs for every page document in the pages directory, sorted."""
    pages = config.pages_path
    if not pages.is_dir():
        return []
    prefix = config.pages_url.rstrip("/")
    return sorted(
        f"{prefix}/{path.name.removesuffix(config.page_suffix)}"
        for path in pages.iterdir()
        if path.is_file() and path.name.endswith(config.page_suffix)
    )


def format_banner(config: AppConfig, pages: list[str]) -> str:
    """Multi-line banner: base URL, sign-in URL, then each page URL."""
    base = f"http://{config.host}:{config.port}"
    lines = [
        _RULE,
        "Admin Portal Frontend Server",
        _RULE,
        f"Frontend URL: {base}",
        f"Login Page:   {base}{config.sign_in_url}",
        f"Site root:    {config.root_path}",
        "Clean URLs:   enabled (no .html extension needed)",
    ]
    if pages:
        lines.append(_RULE)
        lines.append("Pages:")
        lines.extend(f"  - {base}{url}" for url in pages)
    lines.append(_RULE)
    return "\n".join(lines)
