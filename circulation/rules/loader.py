from pathlib import Path

import yaml
from pydantic import ValidationError

from circulation.rules.models import Rules

DEFAULT_RULES_PATH = Path("rules.yaml")


def load_rules(path: Path) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or the schema is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    content = path.read_text(encoding="utf-8")

    # Rules may be kept inside a ```yaml fence in a markdown document
    lines = content.splitlines()
    fenced: list[str] = []
    in_block = False
    found_block = False
    for line in lines:
        stripped = line.strip()
        if stripped.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and stripped.startswith("```"):
            break
        if in_block:
            fenced.append(line)

    clean_content = "\n".join(fenced) if found_block else content

    try:
        data = yaml.safe_load(clean_content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    if data is None:
        data = {}

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e
