"""Shared wiring for RaceReady command-line entry points."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from raceready.llm.config import ModelSettings
from raceready.llm.openrouter import OpenRouterDocumentModel


DEFAULT_DB_PATH = ".raceready.db"


def configure_runtime() -> None:
    load_dotenv()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
    )


def default_db_path() -> str:
    return os.environ.get("RACEREADY_DB_PATH", DEFAULT_DB_PATH).strip() or DEFAULT_DB_PATH


def build_model(settings: ModelSettings) -> OpenRouterDocumentModel:
    return OpenRouterDocumentModel(settings)


def emit(payload: dict[str, object]) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def fail(message: str) -> int:
    emit({"success": False, "error": message})
    return 1


def write_output(path: str | Path, data: bytes) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    return target
