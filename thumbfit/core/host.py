from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from thumbfit.core.bounds import Bounds, NaturalSize, TargetSize, resolve, validate_bounds, validate_natural
from thumbfit.core.config import BoundsProfile, Padding

logger = logging.getLogger(__name__)


class MeasureMode(str, Enum):
    UNSPECIFIED = "unspecified"
    EXACTLY = "exactly"
    AT_MOST = "at_most"


@dataclass(frozen=True)
class MeasureSpec:
    size: int
    mode: MeasureMode = MeasureMode.UNSPECIFIED


@dataclass(frozen=True)
class Content:
    """Visual content assigned to a host.

    ``data_uri`` is the full attachment, ``thumbnail_uri`` the preview to show.
    """

    data_uri: Optional[str]
    thumbnail_uri: Optional[str] = None
    transfer_done: bool = True
    in_progress: bool = False
    has_play_overlay: bool = False
    fast_preflight_id: Optional[str] = None


@dataclass(frozen=True)
class LoadSizing:
    override: Optional[TargetSize] = None
    center_crop: bool = False


@dataclass(frozen=True)
class LoadRequest:
    """Instructions for the external image loader; ``uri=None`` clears the image."""

    uri: Optional[str]
    sizing: LoadSizing
    corner_radius: int = 0
    cross_fade: bool = True
    error_placeholder: bool = True


class ClickRegion(str, Enum):
    THUMBNAIL = "thumbnail"
    DOWNLOAD = "download"


@dataclass(frozen=True)
class ThumbnailTap:
    content: Content


@dataclass(frozen=True)
class DownloadTap:
    content: Content


@dataclass(frozen=True)
class ParentTap:
    pass


Tap = Union[ThumbnailTap, DownloadTap, ParentTap]
ContentListener = Callable[[Content], None]


class ThumbnailHost:
    """Owns the natural size and bounds of one thumbnail and sizes it per layout pass."""

    def __init__(self, bounds: Bounds, padding: Optional[Padding] = None, corner_radius: int = 0) -> None:
        validate_bounds(bounds)
        self._bounds = bounds
        self.padding = padding or Padding()
        self.corner_radius = corner_radius
        self.natural = NaturalSize()
        self.content: Optional[Content] = None
        self.controls_visible = False
        self.play_overlay_visible = False
        self.thumbnail_listener: Optional[ContentListener] = None
        self.download_listener: Optional[ContentListener] = None
        self.parent_listener: Optional[Callable[[], None]] = None

    @classmethod
    def from_profile(cls, profile: BoundsProfile) -> "ThumbnailHost":
        return cls(profile.bounds, padding=profile.padding, corner_radius=profile.corner_radius)

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    def target_size(self) -> TargetSize:
        return resolve(self.natural, self._bounds)

    def load_sizing(self) -> LoadSizing:
        target = self.target_size()
        if target.is_unconstrained:
            return LoadSizing(center_crop=True)
        return LoadSizing(override=target)

    def measure(self, width_spec: MeasureSpec, height_spec: MeasureSpec) -> tuple[MeasureSpec, MeasureSpec]:
        """Return the specs to pass on to the container.

        Unchanged specs mean the container should fall back to its default sizing.
        """
        logger.debug(
            "measure natural=%s x %s bounds=%s",
            self.natural.width,
            self.natural.height,
            list(self._bounds.as_tuple()),
        )
        target = self.target_size()
        if target.is_unconstrained:
            return width_spec, height_spec

        final_width = int(max(target.width, self._bounds.min_width)) + self.padding.horizontal
        final_height = int(max(target.height, self._bounds.min_height)) + self.padding.vertical
        return MeasureSpec(final_width, width_spec.mode), MeasureSpec(final_height, height_spec.mode)

    def set_content(
        self,
        content: Content,
        natural: Optional[NaturalSize] = None,
        show_controls: bool = False,
        is_preview: bool = False,
    ) -> Optional[LoadRequest]:
        natural = natural or NaturalSize()
        validate_natural(natural)
        self.natural = natural
        self.controls_visible = show_controls
        self.play_overlay_visible = (
            content.thumbnail_uri is not None
            and content.has_play_overlay
            and (content.transfer_done or is_preview)
        )

        if content == self.content:
            logger.info("Not re-loading content %s", content.data_uri)
            return None

        if (
            self.content is not None
            and self.content.fast_preflight_id is not None
            and self.content.fast_preflight_id == content.fast_preflight_id
        ):
            logger.info("Not re-loading content for fast preflight: %s", content.fast_preflight_id)
            self.content = content
            return None

        logger.info(
            "Loading content %s, transfer done: %s, fast preflight id: %s",
            content.data_uri,
            content.transfer_done,
            content.fast_preflight_id,
        )
        self.content = content
        return LoadRequest(
            uri=content.thumbnail_uri,
            sizing=self.load_sizing(),
            corner_radius=self.corner_radius,
            error_placeholder=not content.in_progress,
        )

    def clear(self) -> None:
        self.content = None
        self.controls_visible = False
        self.play_overlay_visible = False

    def resolve_tap(self, region: ClickRegion) -> Optional[Tap]:
        content = self.content
        if region is ClickRegion.DOWNLOAD:
            if self.controls_visible and self.download_listener is not None and content is not None:
                return DownloadTap(content)
            return None

        if (
            self.thumbnail_listener is not None
            and content is not None
            and content.data_uri is not None
            and content.transfer_done
        ):
            return ThumbnailTap(content)
        if self.parent_listener is not None:
            return ParentTap()
        return None

    def click(self, region: ClickRegion) -> Optional[Tap]:
        tap = self.resolve_tap(region)
        if isinstance(tap, ThumbnailTap):
            self.thumbnail_listener(tap.content)
        elif isinstance(tap, DownloadTap):
            self.download_listener(tap.content)
        elif isinstance(tap, ParentTap):
            self.parent_listener()
        return tap
