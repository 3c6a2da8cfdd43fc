from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.db.database import get_db
from storefront.services.sitemap_service import SitemapService

router = APIRouter(tags=["SEO"])


@router.get(
    "/sitemap.xml",
    summary="XML sitemap",
    description="""
    Sitemap of the public storefront: static pages, every active category
    level under `/products/{slug}` and every active product under
    `/product/{slug}`. Falls back to the static pages if the catalog cannot
    be read.
    """,
    response_class=Response,
    responses={200: {"content": {"application/xml": {}}}}
)
async def sitemap(db: Session = Depends(get_db)):
    body = SitemapService(db, settings.site_base_url).render()
    return Response(content=body, media_type="application/xml")
