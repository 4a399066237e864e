from pathlib import Path

from docchat.grounding.exceptions import PromptLoadError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_document_template(path: Path | None = None) -> str:
    """Load the template that frames extracted document text.

    Args:
        path: Path to the template file.
              Defaults to the bundled document_prompt.txt.

    Returns:
        The raw template with ``{filename}`` and ``{content}`` placeholders.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    return _read(path or _DEFAULT_PROMPT_DIR / "document_prompt.txt", "document template")


def load_system_prompt(path: Path | None = None) -> str:
    """Load the system prompt prepended to plain chat conversations."""
    return _read(path or _DEFAULT_PROMPT_DIR / "system_prompt.txt", "system prompt").strip()


def _read(path: Path, label: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptLoadError(f"Failed to load {label}: {exc}") from exc
