"""
Signature hints - Parameter names of the declaration following a comment.

The names are only an ordering hint for `@param` tags. Any text that does not
look like one of the recognized declaration shapes yields no hint.
"""

import logging
import re

logger = logging.getLogger(__name__)

_FUNCTION = re.compile(r"^\s*(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s*\*?\s*[\w$]*\s*\(([^)]*)\)")
_ARROW = re.compile(r"^\s*(?:export\s+)?(?:const|let|var)\s+[\w$]+\s*=\s*(?:async\s*)?\(([^)]*)\)\s*=>")
_METHOD = re.compile(r"^\s*(?:(?:static|async|public|private|protected|get|set)\s+)*[\w$]+\s*\(([^)]*)\)")


def _split_params(params: str) -> list[str]:
    names = []
    for param in params.split(","):
        trimmed = param.strip()
        colon = trimmed.find(":")
        name = trimmed[:colon] if colon > -1 else trimmed
        name = re.split(r"\s+", name.strip())[0] if name.strip() else ""
        name = re.sub(r"[{}\[\]?]", "", name)
        if name.startswith("..."):
            name = name[3:]
        name = name.split("=")[0].strip()
        if name:
            names.append(name)
    return names


def extract_param_order(text_after_comment: str) -> list[str] | None:
    """
    Extract parameter names from the declaration right after a comment.

    Recognizes `function name(a, b)`, `const name = (a, b) =>` and
    `name(a, b)` method shapes. Type annotations, default values,
    destructuring braces and rest markers are stripped.

    Args:
        text_after_comment: Source text starting right after the comment

    Returns:
        Ordered parameter names, or None when no declaration is recognized
    """
    try:
        for pattern in (_FUNCTION, _ARROW, _METHOD):
            match = pattern.match(text_after_comment)
            if match:
                return _split_params(match.group(1))
        return None
    except (re.error, IndexError, TypeError) as e:
        logger.debug(f"Could not extract parameter order: {e}")
        return None
