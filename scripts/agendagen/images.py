"""Chairperson avatar/flag lookup and placement."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from .host import PageElement
from .models import FailedImage, ImageResults, NameMatchResult
from .names import extract_clean_name, flag_variants, name_variants
from .placeholders import CHAIR_AVATAR, CHAIR_FLAG

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".tif", ".tiff", ".psd")


def find_image(variants: Iterable[str], folder: str) -> NameMatchResult:
    """Return the first ``variant + extension`` present in ``folder``.

    Every filename tried is recorded, in order, so a miss can be reported
    with the exact names that were looked for.
    """
    variants = list(variants)
    if not folder or not variants:
        return NameMatchResult(found=False)

    root = Path(folder)
    if not root.is_dir():
        return NameMatchResult(found=False, search_attempts=(f"Folder does not exist: {folder}",))

    attempts: list[str] = []
    for variant in variants:
        for ext in IMAGE_EXTENSIONS:
            file_name = f"{variant}{ext}"
            attempts.append(file_name)
            candidate = root / file_name
            if candidate.is_file():
                return NameMatchResult(
                    found=True,
                    file_path=str(candidate),
                    file_name=file_name,
                    search_attempts=tuple(attempts),
                )
    return NameMatchResult(found=False, search_attempts=tuple(attempts))


@dataclass
class ChairImageOutcome:
    raw_name: str
    clean_name: str = ""
    avatar_file: Optional[str] = None
    flag_file: Optional[str] = None
    attempts: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.avatar_file is not None

    @property
    def message(self) -> str:
        text = f"{self.clean_name} -> {self.avatar_file}"
        if self.flag_file:
            text += f" + {self.flag_file}"
        return text


def _place(clone: PageElement, label: str, file_path: str, fitting: str) -> bool:
    frame = clone if clone.label == label else clone.find_descendant(label)
    if frame is None:
        return False
    frame.place_image(Path(file_path), fitting)
    return True


def process_chair_images(clone: PageElement, raw_name: str, folder: str, fitting: str) -> ChairImageOutcome:
    """Fill the avatar frame (and, after it, the flag frame) inside a chair clone."""
    outcome = ChairImageOutcome(raw_name=raw_name)
    clean = extract_clean_name(raw_name)
    if not clean:
        outcome.attempts = [f"Could not extract clean name from: {raw_name}"]
        return outcome
    outcome.clean_name = clean

    avatar = find_image(name_variants(clean), folder)
    outcome.attempts.extend(avatar.search_attempts)
    if not avatar.found or not _place(clone, CHAIR_AVATAR, avatar.file_path, fitting):
        return outcome
    outcome.avatar_file = avatar.file_name

    flag = find_image(flag_variants(clean), folder)
    if flag.found and _place(clone, CHAIR_FLAG, flag.file_path, fitting):
        outcome.flag_file = flag.file_name
    return outcome


def record_outcome(results: ImageResults, outcome: ChairImageOutcome) -> None:
    results.total_attempted += 1
    if outcome.success:
        results.successful.append(outcome.message)
    else:
        results.failed.append(FailedImage(name=outcome.clean_name or outcome.raw_name, attempts=list(outcome.attempts)))
