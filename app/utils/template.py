import re
from typing import Any, Dict, Optional

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")

def replace_variables(template: str, variables: Optional[Dict[str, Any]]) -> str:
    """
    Substitute {{name}} tokens from variables.

    Tokens with no matching key (or a None value) are left verbatim, so
    "{{missing}}" renders as "{{missing}}".
    """
    variables = variables or {}

    def _substitute(match: re.Match) -> str:
        value = variables.get(match.group(1))
        if value is None:
            return match.group(0)
        return str(value)

    return PLACEHOLDER_PATTERN.sub(_substitute, template)

def strip_html(html: str) -> str:
    return re.sub(r"<[^>]*>", "", html)
