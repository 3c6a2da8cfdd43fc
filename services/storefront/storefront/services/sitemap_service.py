from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime, timezone
from typing import List, Optional
from xml.etree import ElementTree
import logging

from storefront.models.category import Category, SubCategory, SuperSubCategory
from storefront.models.product import Product

logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"

# (path, change frequency, priority)
STATIC_PAGES = [
    ("/", "daily", 1.0),
    ("/about", "monthly", 0.8),
    ("/Services", "monthly", 0.8),
    ("/Contact", "monthly", 0.7),
    ("/Certificates", "monthly", 0.6),
    ("/products", "daily", 0.9),
]

# (model, url prefix, priority)
CATALOG_PAGES = [
    (Category, "/products", 0.7),
    (SubCategory, "/products", 0.6),
    (SuperSubCategory, "/products", 0.5),
    (Product, "/product", 0.8),
]


class SitemapService:

    def __init__(self, db: Session, base_url: str):
        self.db = db
        self.base_url = base_url.rstrip("/")

    def build_entries(self) -> List[dict]:
        now = datetime.now(timezone.utc)
        entries = [
            self._entry(path, now, frequency, priority)
            for path, frequency, priority in STATIC_PAGES
        ]

        try:
            for model, prefix, priority in CATALOG_PAGES:
                rows = self.db.query(model).filter(model.status == "active").all()
                for row in rows:
                    entries.append(self._entry(
                        f"{prefix}/{row.slug}",
                        row.updated_at or row.created_at,
                        "weekly",
                        priority,
                    ))
        except SQLAlchemyError as e:
            # Degrade to the static pages
            logger.error(f"Failed to load catalog for sitemap: {e}", exc_info=True)
            self.db.rollback()
            return entries[:len(STATIC_PAGES)]

        return entries

    def _entry(self, path: str, last_modified: Optional[datetime], frequency: str, priority: float) -> dict:
        return {
            "url": f"{self.base_url}{path}",
            "last_modified": last_modified,
            "change_frequency": frequency,
            "priority": priority,
        }

    def render(self) -> bytes:
        return render_sitemap(self.build_entries())


def render_sitemap(entries: List[dict]) -> bytes:
    urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NAMESPACE)
    for entry in entries:
        url = ElementTree.SubElement(urlset, "url")
        ElementTree.SubElement(url, "loc").text = entry["url"]
        if entry.get("last_modified"):
            ElementTree.SubElement(url, "lastmod").text = entry["last_modified"].isoformat()
        ElementTree.SubElement(url, "changefreq").text = entry["change_frequency"]
        ElementTree.SubElement(url, "priority").text = f"{entry['priority']:.1f}"
    return ElementTree.tostring(urlset, encoding="utf-8", xml_declaration=True)
