from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, Query, Request, Response, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth.dependencies import require_user
from .auth.models import User
from .dependencies import (
    get_photo_service,
    get_restaurant_repository,
    get_restaurant_service,
    get_review_service,
)
from .errors import (
    ErrorKind,
    RestaurantAppError,
    RestaurantNotFoundError,
    ReviewNotFoundError,
    format_validation_errors,
    translate,
)
from .logging_config import configure_logging
from .photos.models import Photo
from .photos.service import PhotoService
from .restaurants.models import (
    Page,
    Restaurant,
    RestaurantCreateUpdateRequest,
    RestaurantSummary,
    Review,
)
from .restaurants.service import DEFAULT_PAGE_SIZE, RestaurantService
from .reviews.models import ReviewCreateUpdateRequest
from .reviews.service import DEFAULT_SORT, ReviewService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Restaurant API starting")
    get_restaurant_repository().ensure_index()
    yield
    logger.info("Restaurant API stopped")


app = FastAPI(title="Restaurant Review API", version="1.0.0", lifespan=lifespan)


# ── Error translation ────────────────────────────────────────────────────


@app.exception_handler(RestaurantAppError)
def app_error_handler(request: Request, exc: RestaurantAppError) -> JSONResponse:
    status, body = translate(exc)
    return JSONResponse(status_code=status, content=body)


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.error("Caught request validation error")
    status = ErrorKind.VALIDATION_FAILURE.status
    return JSONResponse(
        status_code=status,
        content={"status": status, "message": format_validation_errors(exc.errors())},
    )


@app.exception_handler(StarletteHTTPException)
def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": exc.status_code, "message": str(exc.detail)},
    )


@app.exception_handler(Exception)
def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status, body = translate(exc)
    return JSONResponse(status_code=status, content=body)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/photos/{photo_id}")
def get_photo(
    photo_id: str,
    photo_service: PhotoService = Depends(get_photo_service),
) -> FileResponse:
    path = photo_service.get_photo_path(photo_id)
    if path is None:
        raise StarletteHTTPException(status_code=404, detail="Photo not found")
    return FileResponse(str(path), headers={"Content-Disposition": "inline"})


# ── Photos ───────────────────────────────────────────────────────────────


@app.post("/api/photos", response_model=Photo)
def upload_photo(
    file: UploadFile = File(...),
    user: User = Depends(require_user),
    photo_service: PhotoService = Depends(get_photo_service),
) -> Photo:
    # One byte past the limit is enough for storage to reject an oversize file.
    data = file.file.read(photo_service.max_upload_size + 1)
    return photo_service.upload_photo(data, file.content_type, file.filename)


# ── Restaurants ──────────────────────────────────────────────────────────


@app.post("/api/restaurants", response_model=Restaurant)
def create_restaurant(
    body: RestaurantCreateUpdateRequest,
    user: User = Depends(require_user),
    service: RestaurantService = Depends(get_restaurant_service),
) -> Restaurant:
    return service.create_restaurant(body, created_by=user)


@app.get("/api/restaurants", response_model=Page[RestaurantSummary])
def search_restaurants(
    q: str | None = None,
    min_rating: float | None = Query(None, alias="minRating", ge=0, le=5),
    latitude: float | None = Query(None, ge=-90, le=90),
    longitude: float | None = Query(None, ge=-180, le=180),
    radius: float | None = Query(None, gt=0),
    page: int = Query(1, ge=1),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    user: User = Depends(require_user),
    service: RestaurantService = Depends(get_restaurant_service),
) -> Page[RestaurantSummary]:
    result = service.search_restaurants(
        query=q,
        min_rating=min_rating,
        latitude=latitude,
        longitude=longitude,
        radius=radius,
        page=page,
        size=size,
    )
    return result.map(RestaurantSummary.from_restaurant)


@app.get("/api/restaurants/{restaurant_id}", response_model=Restaurant)
def get_restaurant(
    restaurant_id: str,
    user: User = Depends(require_user),
    service: RestaurantService = Depends(get_restaurant_service),
) -> Restaurant:
    restaurant = service.get_restaurant(restaurant_id)
    if restaurant is None:
        raise RestaurantNotFoundError(restaurant_id)
    return restaurant


@app.put("/api/restaurants/{restaurant_id}", response_model=Restaurant)
def update_restaurant(
    restaurant_id: str,
    body: RestaurantCreateUpdateRequest,
    user: User = Depends(require_user),
    service: RestaurantService = Depends(get_restaurant_service),
) -> Restaurant:
    return service.update_restaurant(restaurant_id, body)


@app.delete("/api/restaurants/{restaurant_id}", status_code=204)
def delete_restaurant(
    restaurant_id: str,
    user: User = Depends(require_user),
    service: RestaurantService = Depends(get_restaurant_service),
) -> Response:
    service.delete_restaurant(restaurant_id)
    return Response(status_code=204)


# ── Reviews ──────────────────────────────────────────────────────────────


@app.post("/api/restaurants/{restaurant_id}/reviews", response_model=Review)
def create_review(
    restaurant_id: str,
    body: ReviewCreateUpdateRequest,
    user: User = Depends(require_user),
    service: ReviewService = Depends(get_review_service),
) -> Review:
    return service.create_review(user, restaurant_id, body)


@app.get("/api/restaurants/{restaurant_id}/reviews", response_model=Page[Review])
def list_reviews(
    restaurant_id: str,
    page: int = Query(1, ge=1),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    sort: str = DEFAULT_SORT,
    user: User = Depends(require_user),
    service: ReviewService = Depends(get_review_service),
) -> Page[Review]:
    return service.list_reviews(restaurant_id, page=page, size=size, sort=sort)


@app.get("/api/restaurants/{restaurant_id}/reviews/{review_id}", response_model=Review)
def get_review(
    restaurant_id: str,
    review_id: str,
    user: User = Depends(require_user),
    service: ReviewService = Depends(get_review_service),
) -> Review:
    review = service.get_review(restaurant_id, review_id)
    if review is None:
        raise ReviewNotFoundError(review_id)
    return review


@app.put("/api/restaurants/{restaurant_id}/reviews/{review_id}", response_model=Review)
def update_review(
    restaurant_id: str,
    review_id: str,
    body: ReviewCreateUpdateRequest,
    user: User = Depends(require_user),
    service: ReviewService = Depends(get_review_service),
) -> Review:
    return service.update_review(user, restaurant_id, review_id, body)


@app.delete("/api/restaurants/{restaurant_id}/reviews/{review_id}", status_code=204)
def delete_review(
    restaurant_id: str,
    review_id: str,
    user: User = Depends(require_user),
    service: ReviewService = Depends(get_review_service),
) -> Response:
    service.delete_review(restaurant_id, review_id)
    return Response(status_code=204)
