from datetime import datetime, timezone
from typing import Iterable, Optional
from xml.sax.saxutils import escape

from inkwell.schemas.blog import SitemapEntry

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def _url(loc: str, lastmod: str, changefreq: str, priority: str) -> str:
    return (
        "  <url>\n"
        f"    <loc>{escape(loc)}</loc>\n"
        f"    <lastmod>{escape(lastmod)}</lastmod>\n"
        f"    <changefreq>{changefreq}</changefreq>\n"
        f"    <priority>{priority}</priority>\n"
        "  </url>\n"
    )


def render_sitemap(
    entries: Iterable[SitemapEntry], site_url: str, now: Optional[str] = None
) -> str:
    """
    Build sitemap XML: the home page, the search page, then one entry per
    published post with its last update as lastmod.
    """
    base = site_url.rstrip("/")
    now = now or datetime.now(timezone.utc).isoformat()

    body = _url(base, now, "daily", "1.0")
    body += _url(f"{base}/search", now, "weekly", "0.8")
    for entry in entries:
        body += _url(f"{base}/posts/{entry.slug}", entry.updated_at, "monthly", "0.7")

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<urlset xmlns="{SITEMAP_NS}">\n'
        f"{body}"
        "</urlset>\n"
    )
