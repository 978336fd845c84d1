from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, NonNegativeFloat

from thumbfit.core.host import MeasureMode


class NaturalSizePayload(BaseModel):
    width: float = Field(0, ge=0)
    height: float = Field(0, ge=0)


class BoundsPayload(BaseModel):
    min_width: float = Field(0, ge=0)
    max_width: float = Field(0, ge=0)
    min_height: float = Field(0, ge=0)
    max_height: float = Field(0, ge=0)


class PaddingPayload(BaseModel):
    left: int = Field(0, ge=0)
    top: int = Field(0, ge=0)
    right: int = Field(0, ge=0)
    bottom: int = Field(0, ge=0)


class MeasureSpecPayload(BaseModel):
    size: int = Field(0, ge=0)
    mode: MeasureMode = MeasureMode.UNSPECIFIED


class ResolveRequest(BaseModel):
    natural: NaturalSizePayload = Field(default_factory=NaturalSizePayload)
    bounds: BoundsPayload = Field(default_factory=BoundsPayload)


class ResolveResponse(BaseModel):
    width: int
    height: int
    unconstrained: bool


class BatchResolveRequest(BaseModel):
    naturals: list[tuple[NonNegativeFloat, NonNegativeFloat]]
    bounds: BoundsPayload = Field(default_factory=BoundsPayload)


class BatchResolveResponse(BaseModel):
    sizes: list[tuple[int, int]]


class MeasureRequest(BaseModel):
    """Size a host from a named ``profile`` or from explicit ``bounds`` and ``padding``, never both."""

    natural: NaturalSizePayload = Field(default_factory=NaturalSizePayload)
    profile: Optional[str] = None
    bounds: BoundsPayload = Field(default_factory=BoundsPayload)
    padding: PaddingPayload = Field(default_factory=PaddingPayload)
    width_spec: MeasureSpecPayload = Field(default_factory=MeasureSpecPayload)
    height_spec: MeasureSpecPayload = Field(default_factory=MeasureSpecPayload)


class MeasureResponse(BaseModel):
    width_spec: MeasureSpecPayload
    height_spec: MeasureSpecPayload
    framework_default: bool


class ProfileResponse(BaseModel):
    name: str
    bounds: BoundsPayload
    padding: PaddingPayload
    corner_radius: int
