"""Colored pipeline logger — ANSI-colored console logging for query resolution.

Provides a PipelineLogger with color-coded output per pipeline stage,
making it easy to visually trace how a question was analysed and answered.

Color scheme:
    🟢 Green   — Normalization / Answer
    🟡 Yellow  — Intent / Ambiguity
    🔵 Blue    — Scoring / Search tiers
    🟣 Magenta — Fuzzy / Subtopic heuristics
    🟠 Cyan    — Topic resolution
    🔴 Red     — Errors / Fallback
    ⚪ Gray    — Timing / Details
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


# ── Pipeline Stage Definitions ───────────────────────────────────────

class PipelineStage:
    """Predefined query-pipeline stages with colors and icons."""

    NORMALIZE = ("NORMALIZE", _Colors.GREEN, "🧹")
    INTENT = ("INTENT", _Colors.YELLOW, "🎯")
    SCORING = ("SCORING", _Colors.BLUE, "📊")
    FUZZY = ("FUZZY", _Colors.MAGENTA, "🔍")
    SUBTOPIC = ("SUBTOPIC", _Colors.MAGENTA, "🏷️")
    TOPIC = ("TOPIC", _Colors.CYAN, "🗂️")
    AMBIGUITY = ("AMBIGUITY", _Colors.YELLOW, "❓")
    SEARCH = ("SEARCH", _Colors.BLUE, "🔎")
    FALLBACK = ("FALLBACK", _Colors.RED, "↩️")
    FEEDBACK = ("FEEDBACK", _Colors.WHITE, "📝")
    ANSWER = ("ANSWER", _Colors.GREEN, "✅")
    ERROR = ("ERROR", _Colors.RED, "❌")


# ── PipelineLogger ───────────────────────────────────────────────────

class PipelineLogger:
    """Color-coded logger for the query-resolution pipeline.

    Usage:
        log = PipelineLogger("QueryAnalyzer")
        log.step_start(PipelineStage.SCORING, "Scoring 42 records")
        log.detail("best candidate", key_phrase="qué es el smog", score=0.61)
        log.step_complete(PipelineStage.SCORING, "Strong match")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)
        self._component = component_name

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the start of a pipeline step with its stage color."""
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({self._format_details(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the successful completion of a pipeline step."""
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({self._format_details(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_warning(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log a noteworthy but non-fatal outcome in yellow."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.YELLOW}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.YELLOW}{message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({self._format_details(kwargs)}){_Colors.RESET}"
        self._logger.warning(formatted)

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a pipeline step error in red."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        """Log additional detail (gray/dimmed, debug level)."""
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        if kwargs:
            formatted += f" {_Colors.DIM}({self._format_details(kwargs)}){_Colors.RESET}"
        self._logger.debug(formatted)

    def separator(self, title: str = "") -> None:
        """Log a visual separator line."""
        if title:
            self._logger.info(
                f"{_Colors.GRAY}{'─' * 10} {title} {'─' * max(50 - len(title), 0)}{_Colors.RESET}"
            )
        else:
            self._logger.info(f"{_Colors.GRAY}{'─' * 60}{_Colors.RESET}")

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed time.

        Usage:
            with log.timed_step(PipelineStage.SEARCH, "Tiered search"):
                answers = await orchestrator.resolve(...)
        """
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed:.3f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} — {elapsed:.3f}s")

    @staticmethod
    def _format_details(kwargs: dict[str, Any]) -> str:
        parts = []
        for key, value in kwargs.items():
            if isinstance(value, float):
                value = f"{value:.3f}"
            parts.append(f"{key}={value}")
        return " | ".join(parts)
