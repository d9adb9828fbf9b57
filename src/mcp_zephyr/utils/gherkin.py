"""Conversion of markdown-flavoured BDD text into Zephyr Gherkin scripts."""

GHERKIN_KEYWORDS = ("Given", "When", "Then", "And")
SEPARATOR = "---"
INDENT = "    "


def _convert_line(line: str) -> str | None:
    """Classify a single trimmed line, returning the Gherkin line or None."""
    for keyword in GHERKIN_KEYWORDS:
        marker = f"**{keyword}**"
        if line.startswith(marker):
            remainder = line[len(marker) :].strip()
            return f"{keyword} {remainder}" if remainder else keyword

    if line.startswith(tuple(f"{keyword} " for keyword in GHERKIN_KEYWORDS)):
        return line
    return None


def convert_to_gherkin(bdd_content: str) -> str:
    """
    Convert loosely formatted BDD text into indented Gherkin steps.

    Bold markdown keywords (``**Given** ...``) are unwrapped, bare keyword
    lines pass through, blank lines and ``---`` separators are dropped and
    anything else is silently discarded. Each surviving line is indented
    with four spaces.

    Args:
        bdd_content: Multi-line BDD narrative.

    Returns:
        The Gherkin text, or an empty string when no step survives.
    """
    steps: list[str] = []
    for raw_line in bdd_content.split("\n"):
        line = raw_line.strip()
        if not line or line.startswith(SEPARATOR):
            continue
        converted = _convert_line(line)
        if converted is not None:
            steps.append(converted)

    if not steps:
        return ""
    return INDENT + f"\n{INDENT}".join(steps)
