import json
import logging
import threading
from pathlib import Path

from pydantic import ValidationError

from studyguardian.config import get_settings
from studyguardian.models.analysis import AnalysisResult, Language

logger = logging.getLogger(__name__)

RESULTS_KEY = "studyguardian_results"
LANGUAGE_KEY = "studyguardian_language"

_write_lock = threading.Lock()


class ResultCache:
    """Single-slot JSON file holding the last AnalysisResult and the language preference."""

    def __init__(self, path: Path):
        self.path = path

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Cache parse error in %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, values: dict) -> None:
        """Merge values into the file; readers only ever see a complete file."""
        with _write_lock:
            data = self._read_all()
            data.update(values)
            tmp_path = self.path.with_name(f"{self.path.name}.tmp")
            tmp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
            tmp_path.replace(self.path)

    def save(self, result: AnalysisResult, language: Language) -> None:
        self._write({RESULTS_KEY: result.model_dump(by_alias=True), LANGUAGE_KEY: language.value})

    def save_result(self, result: AnalysisResult) -> None:
        self._write({RESULTS_KEY: result.model_dump(by_alias=True)})

    def load_result(self) -> AnalysisResult | None:
        raw = self._read_all().get(RESULTS_KEY)
        if raw is None:
            return None
        try:
            return AnalysisResult.model_validate(raw)
        except ValidationError as e:
            logger.error("Cache parse error in %s: %s", self.path, e)
            return None

    def save_language(self, language: Language) -> None:
        self._write({LANGUAGE_KEY: language.value})

    def load_language(self) -> Language:
        try:
            return Language(self._read_all().get(LANGUAGE_KEY, Language.ENGLISH.value))
        except ValueError:
            return Language.ENGLISH


def get_result_cache() -> ResultCache:
    return ResultCache(get_settings().cache_file)
