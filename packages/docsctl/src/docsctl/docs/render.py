from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.effects import FileSystem
from ..errors import SlugCollisionError
from .manifest import Feature

SCREENSHOTS_URL_PREFIX = "/screenshots/"


@dataclass(frozen=True)
class GeneratedPage:
    category: str
    slug: str
    content: str
    features: tuple[Feature, ...]

    @property
    def filename(self) -> str:
        return f"{self.slug}.md"


def slugify(name: str) -> str:
    return name.lower().replace(" ", "-")


def image_basename(image_path: str) -> str:
    return image_path.replace("\\", "/").rsplit("/", 1)[-1]


def screenshot_ref(image_path: str) -> str:
    # The site serves every screenshot from one flat public directory.
    return f"{SCREENSHOTS_URL_PREFIX}{image_basename(image_path)}"


def render_page(category: str, features: list[Feature]) -> GeneratedPage:
    lines = [f"# {category}", "", f"This section covers the {category} features.", ""]
    for feature in features:
        lines.extend(
            [
                f"## {feature.title}",
                "",
                feature.description,
                "",
                f"![{feature.title}]({screenshot_ref(feature.image_path)})",
                "",
                "---",
                "",
            ]
        )
    return GeneratedPage(
        category=category,
        slug=slugify(category),
        content="\n".join(lines),
        features=tuple(features),
    )


def find_slug_collisions(categories: list[str]) -> dict[str, list[str]]:
    by_slug: dict[str, list[str]] = {}
    for name in categories:
        by_slug.setdefault(slugify(name), []).append(name)
    return {slug: names for slug, names in by_slug.items() if len(names) > 1}


def render_pages(groups: dict[str, list[Feature]]) -> list[GeneratedPage]:
    collisions = find_slug_collisions(list(groups))
    if collisions:
        detail = "; ".join(f"{slug}.md <- {', '.join(repr(n) for n in names)}" for slug, names in sorted(collisions.items()))
        raise SlugCollisionError(f"categories map to the same page file: {detail}")
    return [render_page(name, rows) for name, rows in groups.items()]


def write_pages(fs: FileSystem, pages: list[GeneratedPage], out_dir: Path) -> list[Path]:
    fs.mkdir(out_dir)
    written: list[Path] = []
    for page in pages:
        target = out_dir / page.filename
        fs.write_text(target, page.content)
        written.append(target)
    return written
