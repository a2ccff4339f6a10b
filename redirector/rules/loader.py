from pathlib import Path

import yaml
from pydantic import ValidationError

from redirector.rules.models import UserConfiguration


def _strip_markdown_fence(content: str) -> str:
    """Return the first ```yaml block if there is one, else the whole text."""
    yaml_lines = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break
        if in_block:
            yaml_lines.append(line)

    if found_block:
        return "\n".join(yaml_lines)
    return content


def parse_user_configuration(content: str) -> UserConfiguration:
    """
    Parse and validate configuration text.
    Raises ValueError on bad YAML or a schema mismatch.
    """
    try:
        data = yaml.safe_load(_strip_markdown_fence(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in configuration: {e}") from e

    # An empty file is an empty configuration
    if data is None:
        data = {}

    try:
        return UserConfiguration.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Configuration validation failed:\n{e}") from e


def load_user_configuration(path: Path) -> UserConfiguration:
    """
    Load and validate the configuration file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if YAML or schema invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path) as f:
        content = f.read()

    return parse_user_configuration(content)
