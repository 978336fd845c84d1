from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from PIL import Image

from thumbfit.core.bounds import Bounds, resolve
from thumbfit.core.config import load_config, load_profiles
from thumbfit.core.probe import probe_natural_size

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".webp"}

logger = logging.getLogger("resolve_sizes")


def pick_bounds(profile: Optional[str], explicit: Optional[list[int]], profiles_path: Path) -> Bounds:
    if explicit is not None:
        return Bounds(*explicit)
    if profile is None:
        return Bounds()
    profiles = load_profiles(profiles_path)
    if profile not in profiles:
        raise SystemExit(f"Unknown profile {profile!r}; known: {', '.join(sorted(profiles))}")
    return profiles[profile].bounds


def resolve_directory(image_dir: Path, bounds: Bounds) -> list[dict]:
    image_paths = sorted(p for p in image_dir.iterdir() if p.suffix.lower() in IMAGE_SUFFIXES)
    if not image_paths:
        raise RuntimeError(f"No images found in {image_dir}")

    results = []
    for path in image_paths:
        try:
            natural = probe_natural_size(path.read_bytes())
        except (OSError, Image.DecompressionBombError) as exc:
            logger.warning("Skipping %s: %s", path.name, exc)
            continue
        target = resolve(natural, bounds)
        results.append(
            {
                "file": path.name,
                "natural": [natural.width, natural.height],
                "target": [target.width, target.height],
            }
        )
    return results


def main() -> None:
    parser = argparse.ArgumentParser(description="Resolve thumbnail display sizes for a directory of images.")
    parser.add_argument("images", type=Path)
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--profile", type=str, default=None)
    group.add_argument("--bounds", type=int, nargs=4, metavar=("MIN_W", "MAX_W", "MIN_H", "MAX_H"))
    parser.add_argument("--profiles-path", type=Path, default=None)
    args = parser.parse_args()

    config = load_config()
    logging.basicConfig(level=config.log_level)

    bounds = pick_bounds(args.profile, args.bounds, args.profiles_path or config.profiles_path)
    for row in resolve_directory(args.images, bounds):
        print(json.dumps(row))


if __name__ == "__main__":
    main()
