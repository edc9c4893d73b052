from collections.abc import Sequence


def render_report(avatar_lines: Sequence[str], module_contents: Sequence[str]) -> str:
    """Join the avatar and the module contents into the printed report.

    The avatar always comes first. Modules with empty contents add no line.
    """

    lines = list(avatar_lines)
    lines.extend(contents for contents in module_contents if contents)
    return "\n".join(lines)
