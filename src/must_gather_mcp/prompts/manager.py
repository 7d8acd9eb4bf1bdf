from pathlib import Path
from typing import Any

import yaml

DEFAULT_PROMPTS_PATH = Path(__file__).parent / "prompts.yaml"


class PromptManager:
    def __init__(self, file_path: Path = DEFAULT_PROMPTS_PATH) -> None:
        self.file_path = file_path
        self._prompts: dict[str, Any] | None = None

    def _load_prompts(self) -> dict[str, Any]:
        if self._prompts is None:
            with self.file_path.open("r", encoding="utf-8") as prompts_file:
                self._prompts = yaml.safe_load(prompts_file) or {}
        return self._prompts

    def _load_prompt(self, key: str) -> Any:
        """Look up a dotted key such as ``tools.search_analysis``."""
        node: Any = self._load_prompts()
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                raise KeyError(f"prompt not found: {key}")
            node = node[part]
        return node
