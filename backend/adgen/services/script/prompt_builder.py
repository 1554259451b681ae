"""
Video prompt construction from a parsed script.
"""

from adgen.models.script import ScriptData

PROMPT_SEPARATOR = ". "


def build_video_prompt(script: ScriptData) -> str:
    """
    Join the non-empty script fields into one generation prompt.

    Fragments appear in a fixed order: style, hook, body, CTA. A lone
    fragment without a hook (usually just the style) makes a poor prompt,
    so in that case the title and style are used instead.
    """
    parts = []
    if script.visual_style:
        parts.append(f"Style: {script.visual_style}")
    if script.hook:
        parts.append(f"Scene 1 (Hook): {script.hook}")
    if script.body:
        parts.append(f"Scene 2 (Body): {script.body}")
    if script.cta:
        parts.append(f"Scene 3 (CTA): {script.cta}")

    if len(parts) == 1 and not script.hook:
        return f"{script.title}{PROMPT_SEPARATOR}{script.visual_style}"

    return PROMPT_SEPARATOR.join(parts)
