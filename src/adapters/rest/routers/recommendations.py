"""Protected medicinal diet recommendation endpoint."""

from fastapi import APIRouter, Depends, HTTPException, status

from factory import ServiceFactory
from domain.entities import HealthProfile
from domain.exceptions import (
    DomainError,
    IncompleteRecipeError,
    InvalidHealthProfileError,
    LLMGatewayError,
    RecipeParseError,
    RepositoryError,
)
from application.context import RequestContext
from adapters.rest.dependencies import get_factory, get_current_user, CurrentUser
from adapters.rest.schemas import HealthProfileBody, RecipeOut, ErrorDetail

router = APIRouter(prefix="/api/medicinal-diet", tags=["recommendations"])


def to_http_exception(exc: DomainError) -> HTTPException:
    """Map a pipeline failure to a status code and a stable error code."""
    if isinstance(exc, InvalidHealthProfileError):
        status_code = 422
        detail = ErrorDetail(code="invalid_health_profile", message=str(exc))
    elif isinstance(exc, LLMGatewayError):
        status_code = status.HTTP_502_BAD_GATEWAY
        detail = ErrorDetail(
            code="llm_gateway_error",
            message=str(exc),
            upstream_status=exc.status_code,
        )
    elif isinstance(exc, RecipeParseError):
        status_code = status.HTTP_502_BAD_GATEWAY
        detail = ErrorDetail(
            code=exc.code,
            message=str(exc),
            field=exc.field if isinstance(exc, IncompleteRecipeError) else None,
        )
    elif isinstance(exc, RepositoryError):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        detail = ErrorDetail(code="persistence_error", message="Could not save the recommendation.")
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        detail = ErrorDetail(code="internal_error", message=str(exc))
    return HTTPException(
        status_code=status_code,
        detail=detail.model_dump(exclude_none=True),
    )


@router.post("/recommend", response_model=RecipeOut)
async def recommend(
    body: HealthProfileBody,
    user: CurrentUser = Depends(get_current_user),
    factory: ServiceFactory = Depends(get_factory),
):
    service = factory.create_recommendation_service()
    ctx = RequestContext(user_id=user.user_id)
    profile = HealthProfile(
        user_id=user.user_id,
        age=body.age or 0,
        gender=body.gender,
        blood_pressure=body.blood_pressure,
        blood_sugar=body.blood_sugar,
        symptoms=body.symptoms,
        diseases=body.diseases,
    )
    try:
        result = await service.recommend_and_save(ctx, profile)
    except DomainError as exc:
        raise to_http_exception(exc)

    recipe = result.recipe
    return RecipeOut(
        id=recipe.id,
        name=recipe.name,
        intro=recipe.intro,
        ingredients=recipe.ingredients,
        method=recipe.method,
        effect=recipe.effect,
        type=recipe.type,
        create_time=recipe.created_at,
        is_valid=recipe.is_valid,
        taboo=result.generated.taboo,
        suitable_time=result.generated.suitable_time,
        tags=list(result.generated.tags),
    )
