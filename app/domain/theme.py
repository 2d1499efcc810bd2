"""Build-time styling configuration for the site's Tailwind + Skeleton pipeline.

Nothing here runs at request time. The build CLI dumps `ThemeConfig` to JSON
and the front-end's `tailwind.config` loads it.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "SOURCE_GLOB",
    "SKELETON_PACKAGE",
    "ThemeConfigError",
    "ThemePreset",
    "SkeletonThemes",
    "SkeletonPlugin",
    "ThemeConfig",
    "resolve_package_dir",
    "build_theme_config",
]

SKELETON_PACKAGE = "@skeletonlabs/skeleton"
SOURCE_GLOB = "./src/**/*.{html,js,svelte,ts}"
_MARKUP_EXTS = "**/*.{html,js,svelte,ts}"


class ThemeConfigError(ValueError):
    code: str = "invalid_theme_config"


class ThemePreset(BaseModel):
    name: str
    enhancements: bool = True


class SkeletonThemes(BaseModel):
    preset: list[ThemePreset]

    @field_validator("preset")
    @classmethod
    def _at_least_one(cls, v: list[ThemePreset]) -> list[ThemePreset]:
        if not v:
            raise ValueError("at least one theme preset is required")
        return v


class SkeletonPlugin(BaseModel):
    name: Literal["skeleton"] = "skeleton"
    themes: SkeletonThemes


class ThemeConfig(BaseModel):
    """Declarative options accepted by the styling build plugin."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    dark_mode: Literal["class"] = Field(default="class", alias="darkMode")
    content: list[str]
    theme: dict[str, Any] = Field(default_factory=lambda: {"extend": {}})
    plugins: list[SkeletonPlugin]

    def to_tailwind(self) -> dict[str, Any]:
        """Return the config with the key names Tailwind expects (e.g. `darkMode`)."""
        return self.model_dump(by_alias=True)

    def to_json(self) -> str:
        return json.dumps(self.to_tailwind(), indent=2, ensure_ascii=False) + "\n"


def resolve_package_dir(node_modules: Path, package: str = SKELETON_PACKAGE) -> Path:
    """Return the directory holding a package's entry file.

    Equivalent to `join(require.resolve(package), '..')` on the Node side:
    the entry is `main` from the package's package.json, else `index.js`.

    Raises:
        ThemeConfigError: if the package is not installed or its manifest is unreadable.
    """
    pkg_dir = Path(node_modules) / package
    manifest = pkg_dir / "package.json"
    if not manifest.is_file():
        raise ThemeConfigError(f"{package} is not installed under {node_modules}")
    try:
        meta = json.loads(manifest.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ThemeConfigError(f"cannot parse {manifest}: {e}") from e

    entry = meta.get("main") or "index.js"
    return (pkg_dir / entry).parent


def build_theme_config(skeleton_dir: Path | str, presets: list[str] | None = None) -> ThemeConfig:
    """Build the site's theme configuration.

    `skeleton_dir` is the Skeleton package's distributed-files directory,
    usually from `resolve_package_dir`. Presets default to `skeleton`.
    """
    names = presets if presets is not None else ["skeleton"]
    skeleton_glob = f"{Path(skeleton_dir).as_posix()}/{_MARKUP_EXTS}"
    return ThemeConfig(
        dark_mode="class",
        content=[SOURCE_GLOB, skeleton_glob],
        plugins=[
            SkeletonPlugin(
                themes=SkeletonThemes(
                    preset=[ThemePreset(name=n, enhancements=True) for n in names]
                )
            )
        ],
    )
