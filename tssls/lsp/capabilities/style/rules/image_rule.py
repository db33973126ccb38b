"""
Image path completion.

Completes `image: "/|"` style properties with the images shipped in the
app's assets, as the runtime resolves them: `app/assets/images/a.png` and
`app/assets/android/images/a.png` are both `/images/a.png`.
"""
from __future__ import annotations

import asyncio
import re
from pathlib import Path

from tssls.lsp.capabilities.style.candidates import Candidate, CandidateKind
from tssls.lsp.capabilities.style.matcher import matches
from tssls.lsp.capabilities.style.rules.base import CompletionRequest, SubRule


IMAGE_KEYS = (
    "image",
    "backgroundImage",
    "backgroundSelectedImage",
    "backgroundFocusedImage",
    "backgroundDisabledImage",
    "leftImage",
    "rightImage",
    "icon",
)

IMAGE_PATTERN = re.compile(r"\b(?:" + "|".join(IMAGE_KEYS) + r")\s*:\s*['\"][\w./-]*$")

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".webp"}

# logo@2x.png, logo@3x.png -> logo.png
DENSITY_SUFFIX = re.compile(r"@\d(?:\.\d+)?x$")


def runtime_image_path(relative: Path) -> str:
    """Path an image is referenced by from a style sheet."""
    # android/images/res-xhdpi/logo.png -> /images/logo.png
    if len(relative.parts) > 1 and relative.parts[0].startswith("res-"):
        relative = Path(*relative.parts[1:])
    stem = DENSITY_SUFFIX.sub("", relative.stem)
    return "/images/" + relative.with_name(stem + relative.suffix).as_posix()


def collect_images(assets_dir: Path) -> list[str]:
    """All runtime image paths below `assets_dir`, sorted and unique."""
    image_dirs = [assets_dir / "images"]
    if assets_dir.is_dir():
        image_dirs.extend(
            sorted(
                platform / "images"
                for platform in assets_dir.iterdir()
                if platform.is_dir() and platform.name != "images"
            )
        )

    paths: set[str] = set()
    for image_dir in image_dirs:
        if not image_dir.is_dir():
            continue
        for image in image_dir.rglob("*"):
            if image.is_file() and image.suffix.lower() in IMAGE_SUFFIXES:
                paths.add(runtime_image_path(image.relative_to(image_dir)))

    return sorted(paths)


class ImageRule(SubRule):
    """Offers asset image paths for image properties."""

    @property
    def name(self) -> str:
        return "image"

    @property
    def pattern(self) -> re.Pattern[str]:
        return IMAGE_PATTERN

    async def complete(self, request: CompletionRequest) -> list[Candidate]:
        app_dir = request.app_dir
        if app_dir is None:
            return []

        try:
            images = await asyncio.to_thread(collect_images, app_dir / "assets")
        except OSError:
            return []

        return [
            Candidate(label=path, kind=CandidateKind.FILE)
            for path in images
            if matches(path, request.word_prefix)
        ]
