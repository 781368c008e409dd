from studyguardian.models.analysis import AnalysisResult
from studyguardian.services.export import PLACEHOLDER, render_markdown
from conftest import STUDY_GUIDE


class TestRenderMarkdown:
    def test_full_guide(self):
        result = AnalysisResult.model_validate({**STUDY_GUIDE, "usedModel": "gemini-2.5-flash"})
        md = render_markdown(result)
        assert md.startswith("# Study Guide")
        assert "## Summary" in md
        assert "1. What are the phases of mitosis?" in md
        assert "5. What is cytokinesis?" in md
        assert "## Study Plan" in md
        assert "_Generated with gemini-2.5-flash_" in md

    def test_placeholders_for_missing_sections(self):
        md = render_markdown(AnalysisResult(summary="Only summary"))
        assert "Only summary" in md
        assert md.count(PLACEHOLDER) == 3
        assert "Generated with" not in md

    def test_custom_title(self):
        assert render_markdown(AnalysisResult(), title="Biology 101").startswith("# Biology 101")
