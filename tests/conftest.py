import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import pytest

# Ensure local `src` directory is importable before project is installed.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from broadside.io_utils import PromptClosedError, parse_int

# Keep engine DEBUG chatter out of test output
logging.basicConfig(level=logging.WARNING)


class ScriptedPrompt:
    """Prompt source that replays canned answers and records every question asked."""

    def __init__(self, answers: Iterable[str]) -> None:
        self.answers: List[str] = list(answers)
        self.questions: List[str] = []

    def ask_str(self, question: str, default: str = "") -> str:
        self.questions.append(question)
        if not self.answers:
            # a runaway loop ends here instead of hanging the test
            raise PromptClosedError("script exhausted")
        answer = self.answers.pop(0)
        return answer if answer.strip() else default

    def ask_int(self, question: str, default: str = "") -> Optional[int]:
        return parse_int(self.ask_str(question, default))


class RecordingPrinter:
    """Line printer that keeps (level, text) pairs."""

    def __init__(self) -> None:
        self.lines: List[Tuple[str, str]] = []

    def info(self, text: str) -> None:
        self.lines.append(("info", text))

    def error(self, text: str) -> None:
        self.lines.append(("error", text))

    @property
    def infos(self) -> List[str]:
        return [text for level, text in self.lines if level == "info"]

    @property
    def errors(self) -> List[str]:
        return [text for level, text in self.lines if level == "error"]


@pytest.fixture
def printer() -> RecordingPrinter:
    return RecordingPrinter()


@pytest.fixture
def scripted() -> callable:
    """Factory building a ScriptedPrompt from answer strings."""

    def _factory(*answers: str) -> ScriptedPrompt:
        return ScriptedPrompt(answers)

    return _factory
