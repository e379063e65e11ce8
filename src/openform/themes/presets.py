from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEFAULT_THEME = "minimal"


class Theme(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    primary_color: str
    background_color: str
    text_color: str
    accent_color: str
    font_family: str


THEMES: dict[str, Theme] = {
    theme.id: theme
    for theme in [
        Theme(
            id="midnight",
            name="Midnight",
            primary_color="#8B5CF6",
            background_color="#0F0F1A",
            text_color="#F4F4F5",
            accent_color="#A78BFA",
            font_family="Inter, sans-serif",
        ),
        Theme(
            id="ocean",
            name="Ocean",
            primary_color="#0EA5E9",
            background_color="#F0F9FF",
            text_color="#0C4A6E",
            accent_color="#38BDF8",
            font_family="Inter, sans-serif",
        ),
        Theme(
            id="sunset",
            name="Sunset",
            primary_color="#F97316",
            background_color="#FFF7ED",
            text_color="#7C2D12",
            accent_color="#FB923C",
            font_family="Georgia, serif",
        ),
        Theme(
            id="forest",
            name="Forest",
            primary_color="#16A34A",
            background_color="#F0FDF4",
            text_color="#14532D",
            accent_color="#4ADE80",
            font_family="Inter, sans-serif",
        ),
        Theme(
            id="lavender",
            name="Lavender",
            primary_color="#A855F7",
            background_color="#FAF5FF",
            text_color="#581C87",
            accent_color="#C084FC",
            font_family="Inter, sans-serif",
        ),
        Theme(
            id="minimal",
            name="Minimal",
            primary_color="#18181B",
            background_color="#FFFFFF",
            text_color="#18181B",
            accent_color="#71717A",
            font_family="Inter, sans-serif",
        ),
    ]
}


def get_theme(name: str | None) -> Theme:
    theme = THEMES.get(name or DEFAULT_THEME)
    if theme is None:
        logger.warning("Unknown theme %r, using %s", name, DEFAULT_THEME)
        return THEMES[DEFAULT_THEME]
    return theme
