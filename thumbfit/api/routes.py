from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from PIL import Image

from thumbfit.api.schemas import (
    BatchResolveRequest,
    BatchResolveResponse,
    BoundsPayload,
    MeasureRequest,
    MeasureResponse,
    MeasureSpecPayload,
    PaddingPayload,
    ProfileResponse,
    ResolveRequest,
    ResolveResponse,
)
from thumbfit.core.batch import resolve_many
from thumbfit.core.bounds import Bounds, NaturalSize, resolve
from thumbfit.core.cache import ProbeCache
from thumbfit.core.config import BoundsProfile, Padding, load_config, load_profiles
from thumbfit.core.errors import InvalidInputError
from thumbfit.core.host import MeasureSpec, ThumbnailHost
from thumbfit.core.probe import probe_cached

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

CONFIG = load_config()
PROFILES = load_profiles(CONFIG.profiles_path)
PROBE_CACHE = ProbeCache(max_size=CONFIG.probe_cache_size)

ACCEPTED_TYPES = {"image/png", "image/jpeg", "image/gif", "image/webp"}


def _bounds(payload: BoundsPayload) -> Bounds:
    return Bounds(
        min_width=payload.min_width,
        max_width=payload.max_width,
        min_height=payload.min_height,
        max_height=payload.max_height,
    )


def _profile(name: str) -> BoundsProfile:
    profile = PROFILES.get(name)
    if profile is None:
        raise HTTPException(status_code=404, detail=f"Unknown profile: {name}")
    return profile


@router.get("/profiles")
async def list_profiles() -> list[ProfileResponse]:
    return [_profile_response(profile) for profile in PROFILES.values()]


@router.post("/resolve")
async def resolve_size(request: ResolveRequest) -> ResolveResponse:
    try:
        target = resolve(NaturalSize(request.natural.width, request.natural.height), _bounds(request.bounds))
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ResolveResponse(width=target.width, height=target.height, unconstrained=target.is_unconstrained)


@router.post("/resolve/batch")
async def resolve_batch(request: BatchResolveRequest) -> BatchResolveResponse:
    try:
        targets = resolve_many(request.naturals, _bounds(request.bounds))
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return BatchResolveResponse(sizes=[(int(w), int(h)) for w, h in targets.tolist()])


@router.post("/measure")
async def measure(request: MeasureRequest) -> MeasureResponse:
    if request.profile is not None and request.model_fields_set & {"bounds", "padding"}:
        raise HTTPException(status_code=400, detail="Send either a profile or bounds/padding, not both.")

    try:
        if request.profile is not None:
            host = ThumbnailHost.from_profile(_profile(request.profile))
        else:
            padding = Padding(**request.padding.model_dump())
            host = ThumbnailHost(_bounds(request.bounds), padding=padding)

        host.natural = NaturalSize(request.natural.width, request.natural.height)
        width_spec = MeasureSpec(request.width_spec.size, request.width_spec.mode)
        height_spec = MeasureSpec(request.height_spec.size, request.height_spec.mode)
        final_width, final_height = host.measure(width_spec, height_spec)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return MeasureResponse(
        width_spec=MeasureSpecPayload(size=final_width.size, mode=final_width.mode),
        height_spec=MeasureSpecPayload(size=final_height.size, mode=final_height.mode),
        framework_default=host.target_size().is_unconstrained,
    )


@router.post("/probe")
async def probe_image(
    file: UploadFile = File(...),
    profile: Optional[str] = Form(None),
) -> dict[str, Any]:
    if file.content_type not in ACCEPTED_TYPES:
        raise HTTPException(status_code=400, detail="Only PNG, JPEG, GIF and WebP files are supported.")

    image_bytes = await file.read()
    if not image_bytes:
        raise HTTPException(status_code=400, detail="Empty upload.")
    if len(image_bytes) > CONFIG.max_upload_bytes:
        raise HTTPException(status_code=400, detail="Upload exceeds size limit.")

    bounds = _profile(profile).bounds if profile is not None else Bounds()

    try:
        key, natural = probe_cached(image_bytes, PROBE_CACHE)
    except Image.DecompressionBombError as exc:
        logger.warning("Rejected oversized image %s: %s", file.filename, exc)
        raise HTTPException(status_code=400, detail="Image exceeds pixel limit.") from exc
    except OSError as exc:
        logger.warning("Unable to read image header for %s: %s", file.filename, exc)
        raise HTTPException(status_code=400, detail="Unable to decode image.") from exc

    target = resolve(natural, bounds)
    return {
        "hash": key,
        "natural": {"width": natural.width, "height": natural.height},
        "target": {"width": target.width, "height": target.height},
        "unconstrained": target.is_unconstrained,
    }


def _profile_response(profile: BoundsProfile) -> ProfileResponse:
    bounds = profile.bounds
    padding = profile.padding
    return ProfileResponse(
        name=profile.name,
        bounds=BoundsPayload(
            min_width=bounds.min_width,
            max_width=bounds.max_width,
            min_height=bounds.min_height,
            max_height=bounds.max_height,
        ),
        padding=PaddingPayload(left=padding.left, top=padding.top, right=padding.right, bottom=padding.bottom),
        corner_radius=profile.corner_radius,
    )
