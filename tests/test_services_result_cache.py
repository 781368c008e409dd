from studyguardian.models.analysis import AnalysisResult, Language
from studyguardian.services.result_cache import (
    LANGUAGE_KEY,
    RESULTS_KEY,
    ResultCache,
    get_result_cache,
)
from conftest import STUDY_GUIDE

SAMPLE = AnalysisResult.model_validate({**STUDY_GUIDE, "usedModel": "gemini-2.5-flash"})


class TestResultCache:
    def test_empty_cache(self, tmp_path):
        cache = ResultCache(tmp_path / "cache.json")
        assert cache.load_result() is None
        assert cache.load_language() == Language.ENGLISH

    def test_round_trip(self, tmp_path):
        cache = ResultCache(tmp_path / "cache.json")
        cache.save_result(SAMPLE)
        assert cache.load_result() == SAMPLE

    def test_reload_from_new_instance(self, tmp_path):
        path = tmp_path / "cache.json"
        ResultCache(path).save_result(SAMPLE)
        assert ResultCache(path).load_result() == SAMPLE

    def test_single_slot_overwritten(self, tmp_path):
        cache = ResultCache(tmp_path / "cache.json")
        cache.save_result(SAMPLE)
        newer = AnalysisResult(summary="newer", usedModel="m")
        cache.save_result(newer)
        assert cache.load_result() == newer

    def test_language_preference(self, tmp_path):
        cache = ResultCache(tmp_path / "cache.json")
        cache.save_result(SAMPLE)
        cache.save_language(Language.ARABIC)
        assert cache.load_language() == Language.ARABIC
        assert cache.load_result() == SAMPLE

    def test_stored_keys(self, tmp_path):
        import json
        path = tmp_path / "cache.json"
        cache = ResultCache(path)
        cache.save_result(SAMPLE)
        cache.save_language(Language.ENGLISH)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data[LANGUAGE_KEY] == "english"
        assert data[RESULTS_KEY]["examQuestions"] == STUDY_GUIDE["examQuestions"]

    def test_corrupt_file_treated_as_empty(self, tmp_path, caplog):
        path = tmp_path / "cache.json"
        path.write_text("{not json", encoding="utf-8")
        assert ResultCache(path).load_result() is None
        assert "Cache parse error" in caplog.text

    def test_unknown_language_falls_back(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text('{"studyguardian_language": "french"}', encoding="utf-8")
        assert ResultCache(path).load_language() == Language.ENGLISH

    def test_uses_configured_path(self, isolated_settings):
        assert get_result_cache().path == isolated_settings.cache_file

    def test_invalid_result_slot_treated_as_empty(self, tmp_path, caplog):
        path = tmp_path / "cache.json"
        path.write_text('{"studyguardian_results": "oops"}', encoding="utf-8")
        assert ResultCache(path).load_result() is None
        assert "Cache parse error" in caplog.text

    def test_save_writes_result_and_language_together(self, tmp_path):
        path = tmp_path / "cache.json"
        cache = ResultCache(path)
        cache.save(SAMPLE, Language.ARABIC)
        assert cache.load_result() == SAMPLE
        assert cache.load_language() == Language.ARABIC
        assert [p.name for p in tmp_path.iterdir()] == ["cache.json"]

    def test_save_replaces_corrupt_file(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text("{half written", encoding="utf-8")
        cache = ResultCache(path)
        cache.save(SAMPLE, Language.ENGLISH)
        assert cache.load_result() == SAMPLE
