"""Printable Markdown rendering of a study guide."""

from studyguardian.models.analysis import AnalysisResult

PLACEHOLDER = "_Not available._"


def _section(title: str, body: str) -> str:
    return f"## {title}\n\n{body.strip() or PLACEHOLDER}\n"


def render_markdown(result: AnalysisResult, title: str = "Study Guide") -> str:
    if result.exam_questions:
        questions = "\n".join(f"{i}. {q}" for i, q in enumerate(result.exam_questions, start=1))
    else:
        questions = ""

    sections = [
        f"# {title}\n",
        _section("Summary", result.summary),
        _section("Exam Questions", questions),
        _section("Explanation", result.explanation),
        _section("Study Plan", result.study_plan),
    ]
    if result.used_model:
        sections.append(f"---\n\n_Generated with {result.used_model}_\n")
    return "\n".join(sections)
