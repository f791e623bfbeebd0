"""Locate the form's typeface and crest on the filesystem."""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetNames:
    """File names looked up relative to each candidate directory."""

    regular_font: str = "fonts/THSarabun.ttf"
    bold_font: str = "fonts/THSarabun Bold.ttf"
    crest_image: str = "images/garuda.png"


@dataclass(frozen=True)
class ResolvedFont:
    """A localized typeface. ``bold`` equals ``regular`` when no bold file exists."""

    regular: Path
    bold: Path
    bold_is_substitute: bool = False


class DefaultFont:
    """Marker for the built-in Latin typeface."""

    def __repr__(self) -> str:
        return "DEFAULT_FONT"


DEFAULT_FONT = DefaultFont()

FontAsset = ResolvedFont | DefaultFont


@dataclass(frozen=True)
class ResolvedAssets:
    font: FontAsset
    crest: Path | None = None


def default_search_dirs(extra: Iterable[str | Path] = ()) -> list[Path]:
    """Candidate directories in priority order.

    Configured directories come first, then the directory of the running
    script (so a relocated install still finds its assets), then the working
    directory.
    """
    dirs = [Path(d) for d in extra]
    if sys.argv and sys.argv[0]:
        script_dir = Path(sys.argv[0]).resolve().parent
        dirs += [script_dir, script_dir / "backend"]
    dirs += [Path("."), Path("backend")]
    return dirs


def _is_readable(path: Path) -> bool:
    try:
        with path.open("rb") as fh:
            fh.read(1)
    except FileNotFoundError:
        return False
    except OSError as exc:
        log.warning(f"Ignoring unreadable asset {path}: {exc}")
        return False
    return True


def _first_readable(dirs: list[Path], name: str) -> Path | None:
    for base in dirs:
        candidate = base / name
        if _is_readable(candidate):
            return candidate
    return None


def resolve(candidate_dirs: Iterable[str | Path], names: AssetNames = AssetNames()) -> ResolvedAssets:
    """Find the regular font, bold font and crest image.

    Each asset is searched independently, so regular and bold may come from
    different directories. Never raises for missing files.
    """
    dirs = [Path(d) for d in candidate_dirs]
    regular = _first_readable(dirs, names.regular_font)
    bold = _first_readable(dirs, names.bold_font)
    crest = _first_readable(dirs, names.crest_image)

    if regular is None:
        log.warning(
            f"{names.regular_font} not found in {len(dirs)} candidate directories; "
            "using the default font, Thai text will not display correctly"
        )
        font: FontAsset = DEFAULT_FONT
    elif bold is None:
        log.info(f"No bold font found; reusing {regular} for bold text")
        font = ResolvedFont(regular=regular, bold=regular, bold_is_substitute=True)
    else:
        font = ResolvedFont(regular=regular, bold=bold)

    if crest is None:
        log.warning(f"{names.crest_image} not found; the crest will be omitted")

    if isinstance(font, ResolvedFont):
        log.info(f"Resolved assets: regular={font.regular} bold={font.bold} crest={crest}")
    else:
        log.info(f"Resolved assets: regular=<default font> crest={crest}")
    return ResolvedAssets(font=font, crest=crest)
