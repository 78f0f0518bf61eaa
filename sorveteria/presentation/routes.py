from typing import Final

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse

from .. import __version__
from ..application.sorveteria_service import SorveteriaService
from ..domain.entities import Sorveteria
from ..domain.exceptions import NotFoundError
from ..logging_config import get_logger
from .dependencies import get_service
from .templating import templates

logger: Final = get_logger(__name__)

router: Final = APIRouter()


def _page_context(sorveteria: Sorveteria) -> dict:
    """Values the public page shows, in display order."""
    return {
        "sorveteria": sorveteria,
        "photos": sorted(sorveteria.photos, key=lambda photo: photo.order),
        "promotions": sorted(
            sorveteria.active_promotions, key=lambda promotion: promotion.priority
        ),
        "testimonials": sorveteria.approved_testimonials(),
    }


def render_full_page_response(
    request: Request, service: SorveteriaService
) -> HTMLResponse:
    try:
        sorveteria = service.get_sorveteria()
    except NotFoundError:
        logger.info("Public page requested before the profile was configured")
        return templates.TemplateResponse(
            request,
            "not_configured.html",
            {},
            status_code=status.HTTP_404_NOT_FOUND,
        )

    return templates.TemplateResponse(request, "index.html", _page_context(sorveteria))


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def show_sorveteria(
    request: Request, service: SorveteriaService = Depends(get_service)
):
    return render_full_page_response(request, service)


@router.get("/health", tags=["health"], summary="Liveness probe")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}
