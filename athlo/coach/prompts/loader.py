"""Prompt file loader.

Prompt texts live next to this module as .txt files and ship with the
package. All prompt loading should go through load_prompt().
"""

from functools import lru_cache
from pathlib import Path

from loguru import logger

PROMPTS_DIR = Path(__file__).parent


@lru_cache(maxsize=None)
def load_prompt(name: str) -> str:
    """Load a prompt file.

    Files are read once and cached; prompt texts are read-only
    configuration shared by every request.

    Args:
        name: Prompt filename (e.g., "persona.txt", "analysis.txt")

    Returns:
        Prompt content with trailing whitespace stripped

    Raises:
        FileNotFoundError: If prompt file doesn't exist
    """
    prompt_path = PROMPTS_DIR / name
    if not prompt_path.exists():
        raise FileNotFoundError(f"Prompt file not found: {prompt_path}")
    logger.debug(f"Loading prompt '{name}'")
    return prompt_path.read_text(encoding="utf-8").rstrip()
