# ai_providers/prompts.py
from services.difficulty import describe_distribution, resolve_distribution
from services.schemas import DifficultyDistribution

TRUNCATION_SUFFIX = "...(truncated)"


def as_distribution(value) -> DifficultyDistribution:
    """Accept a distribution, a {easy, medium, hard} mapping or a legacy level string."""
    if value is None or isinstance(value, str):
        return resolve_distribution(difficulty=value)
    return resolve_distribution(distribution=value)

SYSTEM_QUIZ_JSON = (
    "You are an expert quiz creator who creates high-quality multiple-choice questions "
    "based on provided content.\n"
    "You MUST return your response in valid JSON format with the following structure:\n"
    "{\n"
    '  "questions": [\n'
    "    {\n"
    '      "id": "1",\n'
    '      "question": "What is...",\n'
    '      "options": ["Option A", "Option B", "Option C", "Option D"],\n'
    '      "correctAnswer": "Option A",\n'
    '      "explanation": "This is correct because...",\n'
    '      "difficulty": "easy|medium|hard"\n'
    "    }\n"
    "  ],\n"
    '  "metadata": {\n'
    '    "title": "Quiz Title",\n'
    '    "description": "Quiz Description",\n'
    '    "difficultyDistribution": {"easy": 0, "medium": 0, "hard": 0},\n'
    '    "numberOfQuestions": 0\n'
    "  }\n"
    "}\n\n"
    "CRITICAL REQUIREMENTS:\n"
    "1. Each question MUST have EXACTLY 4 options (A, B, C, D)\n"
    "2. The correctAnswer MUST BE EXACTLY ONE of the options provided in the options array\n"
    "3. Keep the questions and answers in the SAME LANGUAGE as the source document text\n"
    "4. Include a brief explanation for the correct answer in the same language as the question\n"
    "5. Each option should be distinct and plausible\n"
    "6. Return ONLY the raw JSON object: no markdown code blocks, no comments, no other text"
)

SYSTEM_QUIZ_TABLE = (
    "You are an expert quiz creator who creates high-quality multiple-choice questions "
    "based on provided content.\n"
    "Return ONLY a markdown table with exactly these columns:\n"
    "| Question | Option A | Option B | Option C | Option D | Correct Answer | Explanation | Difficulty |\n"
    "|----------|----------|----------|----------|----------|----------------|-------------|------------|\n"
    "Rules:\n"
    "- One row per question, four distinct options per row.\n"
    "- Correct Answer repeats the full text of the right option, not its letter.\n"
    "- Difficulty is one of easy, medium, hard.\n"
    "- Never use the | character inside a cell.\n"
    "- Keep the language of the source document. No text before or after the table."
)


def truncate_content(content: str, limit: int = 20000) -> str:
    if len(content) > limit:
        return content[:limit] + TRUNCATION_SUFFIX
    return content


def _request_lines(number_of_questions: int, distribution: DifficultyDistribution,
                   additional_instructions: str) -> str:
    split = describe_distribution(as_distribution(distribution), number_of_questions)
    text = (
        f"Generate {number_of_questions} multiple-choice questions based on the provided text content.\n"
        f"Difficulty split: {split}.\n"
    )
    if additional_instructions and additional_instructions.strip():
        text += f"\n{additional_instructions.strip()}\n"
    return text


def build_json_prompt(content: str, number_of_questions: int, distribution: DifficultyDistribution,
                      additional_instructions: str = "", limit: int = 20000) -> str:
    return (
        _request_lines(number_of_questions, distribution, additional_instructions)
        + "\nDouble-check that each correctAnswer exactly matches one of its options.\n\n"
        + "Content to generate quiz from:\n"
        + truncate_content(content, limit)
    )


def build_table_prompt(content: str, number_of_questions: int, distribution: DifficultyDistribution,
                       additional_instructions: str = "", limit: int = 20000) -> str:
    return (
        _request_lines(number_of_questions, distribution, additional_instructions)
        + "\nContent to generate quiz from:\n"
        + truncate_content(content, limit)
    )


QUIZ_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "questions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "string"},
                    "question": {"type": "string"},
                    "options": {"type": "array", "items": {"type": "string"}, "minItems": 4, "maxItems": 4},
                    "correctAnswer": {"type": "string"},
                    "explanation": {"type": "string"},
                    "difficulty": {"type": "string", "enum": ["easy", "medium", "hard"]},
                },
                "required": ["id", "question", "options", "correctAnswer", "explanation", "difficulty"],
            },
        },
        "metadata": {
            "type": "object",
            "properties": {
                "title": {"type": "string"},
                "description": {"type": "string"},
                "numberOfQuestions": {"type": "number"},
            },
            "required": ["title", "description", "numberOfQuestions"],
        },
    },
    "required": ["questions", "metadata"],
}
