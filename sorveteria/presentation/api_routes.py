from typing import Any, Final

from fastapi import APIRouter, Body, Depends, Path, status

from ..application.sorveteria_service import SorveteriaService
from ..config import settings
from .dependencies import get_service
from .responses import (
    ApiResponse,
    ErrorResponse,
    MessageRead,
    PhotoRead,
    PromotionRead,
    PromotionSweepRead,
    SorveteriaRead,
    StatusRead,
    TestimonialRead,
)
from .security import require_internal_token

api_router: Final = APIRouter(
    prefix=f"{settings.api_prefix}/sorveteria",
    tags=["sorveteria"],
    dependencies=[Depends(require_internal_token)],
    responses={
        400: {
            "model": ErrorResponse,
            "description": "VALIDATION_ERROR, LIMIT_EXCEEDED or PRIORITY_CONFLICT",
        },
        401: {"model": ErrorResponse, "description": "Missing or invalid API token"},
        404: {"model": ErrorResponse, "description": "Profile or entity not found"},
    },
)


@api_router.get(
    "",
    response_model=ApiResponse[SorveteriaRead],
    summary="Get the shop profile",
    description="""
    Return the complete profile. The operating status is recomputed from the
    current time before the profile is returned.
    """,
)
async def api_get_sorveteria(
    service: SorveteriaService = Depends(get_service),
) -> ApiResponse[SorveteriaRead]:
    sorveteria = service.get_sorveteria()
    return ApiResponse[SorveteriaRead](data=SorveteriaRead.model_validate(sorveteria))


@api_router.post(
    "",
    response_model=ApiResponse[SorveteriaRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create or replace the shop profile",
    description="""
    The first call creates the profile with id 1; later calls replace every
    field and start photos, testimonials and promotions over.

    The history must mention **origem**, **tradição** and **qualidade**, and
    the differentiators must cover **qualidade**, **tradição** and
    **atendimento** between them.
    """,
)
async def api_create_or_update_sorveteria(
    *,
    service: SorveteriaService = Depends(get_service),
    body: Any = Body(default=None),
) -> ApiResponse[SorveteriaRead]:
    sorveteria = service.create_or_update(body)
    return ApiResponse[SorveteriaRead](data=SorveteriaRead.model_validate(sorveteria))


@api_router.patch(
    "",
    response_model=ApiResponse[SorveteriaRead],
    summary="Update part of the shop profile",
)
async def api_update_sorveteria(
    *,
    service: SorveteriaService = Depends(get_service),
    body: Any = Body(default=None),
) -> ApiResponse[SorveteriaRead]:
    """Merge only the fields present in the body."""
    sorveteria = service.update(body)
    return ApiResponse[SorveteriaRead](data=SorveteriaRead.model_validate(sorveteria))


@api_router.post(
    "/foto",
    response_model=ApiResponse[PhotoRead],
    status_code=status.HTTP_201_CREATED,
    summary="Add an environment photo",
)
async def api_add_photo(
    *,
    service: SorveteriaService = Depends(get_service),
    body: Any = Body(default=None),
) -> ApiResponse[PhotoRead]:
    """Append a photo; at most 12 photos are kept."""
    photo = service.add_photo(body)
    return ApiResponse[PhotoRead](data=PhotoRead.model_validate(photo))


@api_router.delete(
    "/foto/{photo_id}",
    response_model=ApiResponse[MessageRead],
    summary="Remove an environment photo",
)
async def api_remove_photo(
    *,
    service: SorveteriaService = Depends(get_service),
    photo_id: str = Path(description="Photo identifier"),
) -> ApiResponse[MessageRead]:
    result = service.remove_photo(photo_id)
    return ApiResponse[MessageRead](data=MessageRead(**result))


@api_router.post(
    "/depoimento",
    response_model=ApiResponse[TestimonialRead],
    status_code=status.HTTP_201_CREATED,
    summary="Submit a testimonial",
)
async def api_add_testimonial(
    *,
    service: SorveteriaService = Depends(get_service),
    body: Any = Body(default=None),
) -> ApiResponse[TestimonialRead]:
    """New testimonials wait for moderation and do not count toward the rating."""
    testimonial = service.add_testimonial(body)
    data = TestimonialRead.model_validate(testimonial)
    return ApiResponse[TestimonialRead](data=data)


@api_router.patch(
    "/depoimento/{testimonial_id}",
    response_model=ApiResponse[TestimonialRead],
    summary="Moderate a testimonial",
)
async def api_update_testimonial_status(
    *,
    service: SorveteriaService = Depends(get_service),
    testimonial_id: str = Path(description="Testimonial identifier"),
    body: Any = Body(default=None),
) -> ApiResponse[TestimonialRead]:
    testimonial = service.update_testimonial_status(testimonial_id, body)
    data = TestimonialRead.model_validate(testimonial)
    return ApiResponse[TestimonialRead](data=data)


@api_router.post(
    "/promocao",
    response_model=ApiResponse[PromotionRead],
    status_code=status.HTTP_201_CREATED,
    summary="Add a promotion",
    description="""
    At most 3 promotions can be active at once, and only one of them may
    have priority 1.
    """,
)
async def api_add_promotion(
    *,
    service: SorveteriaService = Depends(get_service),
    body: Any = Body(default=None),
) -> ApiResponse[PromotionRead]:
    promotion = service.add_promotion(body)
    return ApiResponse[PromotionRead](data=PromotionRead.model_validate(promotion))


@api_router.post(
    "/cron/remove-promocoes",
    response_model=ApiResponse[PromotionSweepRead],
    summary="Remove expired promotions",
    description="Promotions expiring today are kept until tomorrow.",
)
async def api_remove_expired_promotions(
    service: SorveteriaService = Depends(get_service),
) -> ApiResponse[PromotionSweepRead]:
    result = service.remove_expired_promotions()
    return ApiResponse[PromotionSweepRead](data=PromotionSweepRead(**result))


@api_router.post(
    "/cron/update-status",
    response_model=ApiResponse[StatusRead],
    summary="Recompute the operating status",
)
async def api_update_status(
    service: SorveteriaService = Depends(get_service),
) -> ApiResponse[StatusRead]:
    result = service.update_status()
    return ApiResponse[StatusRead](data=StatusRead(**result))
