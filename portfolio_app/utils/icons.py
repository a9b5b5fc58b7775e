"""Catalog of header icons a portfolio owner can pick from."""

from typing import Dict, List, Optional


HEADER_ICONS: Dict[str, List[str]] = {
    "User": ["person", "profile", "avatar"],
    "Briefcase": ["work", "job", "business", "portfolio"],
    "Code2": ["develop", "software", "programming", "code"],
    "Palette": ["design", "art", "color", "creative"],
    "PenTool": ["write", "draw", "design", "edit"],
    "Sparkles": ["idea", "magic", "ai", "creative", "feature"],
    "Rocket": ["launch", "project", "startup", "innovation"],
    "Lightbulb": ["idea", "innovation", "thought"],
    "Atom": ["science", "tech", "physics", "future"],
    "Award": ["achievement", "recognition", "prize"],
    "Feather": ["light", "write", "soft", "author"],
    "GitBranch": ["code", "version", "develop"],
    "Globe2": ["world", "international", "travel", "web"],
    "Heart": ["love", "passion", "favorite"],
    "Hexagon": ["shape", "tech", "modern", "block"],
    "Layers": ["stack", "design", "develop", "framework"],
    "Leaf": ["nature", "growth", "eco", "organic"],
    "Mountain": ["challenge", "peak", "adventure", "nature"],
    "Star": ["favorite", "rating", "achievement", "quality"],
    "Sun": ["light", "bright", "day", "energy"],
    "Target": ["goal", "aim", "focus", "objective"],
    "Zap": ["energy", "fast", "power", "electric"],
    "Bot": ["ai", "robot", "automation", "chatbot"],
    "Brain": ["think", "mind", "intelligence", "idea"],
    "Brush": ["art", "paint", "design", "creative"],
    "Camera": ["photo", "image", "media"],
    "Compass": ["direction", "navigation", "explore"],
    "DraftingCompass": ["design", "architecture", "precise"],
}

DEFAULT_HEADER_ICON = "User"


def is_known_icon(name: Optional[str]) -> bool:
    return bool(name) and name in HEADER_ICONS


def search_icons(query: str) -> List[str]:
    """Icon names whose name or tags contain ``query`` (case-insensitive)."""
    query = query.strip().lower()
    if not query:
        return list(HEADER_ICONS)
    return [
        name
        for name, tags in HEADER_ICONS.items()
        if query in name.lower() or any(query in tag for tag in tags)
    ]
