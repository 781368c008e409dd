"""Instruction block sent ahead of every document or pasted text."""

from studyguardian.models.analysis import Language

SUMMARY_WORD_LIMIT = 300
EXPLANATION_WORD_LIMIT = 150
EXAM_QUESTION_COUNT = 5

CONTENT_DELIMITER = "\n\n[CONTENT TO ANALYZE]:\n"

_LANGUAGE_NAMES = {
    Language.ENGLISH: "English",
    Language.ARABIC: "Arabic (العربية)",
}

_INSTRUCTIONS = """
ROLE: You are an efficient academic tutor. Your goal is to provide a QUICK, HIGH-IMPACT study summary.

TASK: Analyze the lecture content and output a CONCISE study guide.

LANGUAGE: {language}.

CONSTRAINTS:
- Keep the summary UNDER {summary_limit} words. Focus ONLY on the main ideas.
- Keep the explanation UNDER {explanation_limit} words.
- Be direct and to the point. Speed is key.

OUTPUT FORMAT: Return ONLY a raw JSON object.
JSON Structure:
{{
  "summary": "Concise markdown string. Use bullet points for speed reading. Max {summary_limit} words.",
  "examQuestions": [
{questions}
  ],
  "explanation": "Brief, simple info using the 'Feynman Technique'. Max {explanation_limit} words.",
  "studyPlan": "Short, actionable 3-day checklist (Markdown)."
}}
"""


def build_instructions(language: Language = Language.ENGLISH) -> str:
    questions = ",\n".join(
        f'    "Question {i}{" (Direct & Clear)" if i == 1 else ""}"'
        for i in range(1, EXAM_QUESTION_COUNT + 1)
    )
    return _INSTRUCTIONS.format(
        language=_LANGUAGE_NAMES[language],
        summary_limit=SUMMARY_WORD_LIMIT,
        explanation_limit=EXPLANATION_WORD_LIMIT,
        questions=questions,
    )
