"""Workspace personalization files."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from zeroclaw.storage import write_text_if_missing

logger = logging.getLogger(__name__)

DEFAULT_USER_NAME = "User"
DEFAULT_TIMEZONE = "UTC"
DEFAULT_AGENT_NAME = "ZeroClaw"

COMMUNICATION_STYLES: list[tuple[str, str]] = [
    ("Direct & concise", "Be direct and concise. Skip pleasantries. Get to the point."),
    (
        "Friendly & casual",
        "Be friendly, human, and conversational. Show warmth and empathy while staying efficient. "
        "Use natural contractions.",
    ),
    (
        "Professional & polished",
        "Be professional and polished. Stay calm, structured, and respectful. "
        "Use occasional tone-setting emojis only when appropriate.",
    ),
    (
        "Expressive & playful",
        "Be expressive and playful when appropriate. Use relevant emojis naturally (0-2 max), "
        "and keep serious topics emoji-light.",
    ),
    ("Technical & detailed", "Be technical and detailed. Thorough explanations, code-first."),
    (
        "Balanced",
        "Adapt to the situation. Default to warm and clear communication; "
        "be concise when needed, thorough when it matters.",
    ),
]
CUSTOM_STYLE_INDEX = len(COMMUNICATION_STYLES)
STYLE_LABELS = [label for label, _ in COMMUNICATION_STYLES] + ["Custom"]


def communication_style_for(index: int, custom: str) -> str:
    if 0 <= index < len(COMMUNICATION_STYLES):
        return COMMUNICATION_STYLES[index][1]
    return custom


@dataclass(frozen=True)
class ProjectContext:
    user_name: str
    timezone: str
    agent_name: str
    communication_style: str


def _identity_md(ctx: ProjectContext) -> str:
    return (
        f"# {ctx.agent_name}\n\n"
        f"You are {ctx.agent_name}, a personal agent working for {ctx.user_name}.\n\n"
        "## Communication style\n\n"
        f"{ctx.communication_style}\n"
    )


def _user_md(ctx: ProjectContext) -> str:
    return (
        "# User\n\n"
        f"- **Name:** {ctx.user_name}\n"
        f"- **Timezone:** {ctx.timezone}\n\n"
        "## Notes\n\n"
        "Add preferences, projects and context the agent should remember.\n"
    )


def _memory_md(ctx: ProjectContext) -> str:
    return f"# Memory\n\nLong-term notes kept by {ctx.agent_name}.\n"


def scaffold_workspace(workspace_dir: Path, ctx: ProjectContext) -> list[Path]:
    """Create the workspace layout and personalization files.

    Files that already exist are left alone so re-running onboarding
    never clobbers edits. Returns the paths that were written.
    """
    workspace_dir.mkdir(parents=True, exist_ok=True)
    for subdir in ("memory", "sessions", "skills"):
        (workspace_dir / subdir).mkdir(exist_ok=True)

    created: list[Path] = []
    for filename, content in (
        ("IDENTITY.md", _identity_md(ctx)),
        ("USER.md", _user_md(ctx)),
        ("MEMORY.md", _memory_md(ctx)),
    ):
        path = workspace_dir / filename
        if write_text_if_missing(path, content):
            created.append(path)
    logger.info("Scaffolded workspace %s (%d new file(s))", workspace_dir, len(created))
    return created
