from zapio.models import ContentKind

QUESTION_COUNT = 10
FLASHCARD_COUNT = 10


def build_quiz_prompt(document_text: str, count: int = QUESTION_COUNT) -> str:
    return (
        f"Based on the following document, create a quiz with {count} single-choice questions. "
        "For each question, provide exactly 4 options where only ONE is correct. "
        "Format the output as a JSON array with the following structure for each question: "
        '{"question": "Question text", "options": ["option1", "option2", "option3", "option4"], "correctOption": 0} '
        "where correctOption is the index (0-3) of the correct answer. Here's the document:\n\n"
        + document_text
    )


def build_flashcard_prompt(document_text: str, count: int = FLASHCARD_COUNT) -> str:
    return (
        f"Based on the following document, create exactly {count} flashcards with key concepts. "
        "Each flashcard should have a concise question on the front and a clear, informative answer on the back. "
        "Format the output as a JSON array with the following structure for each flashcard: "
        '{"question": "Question text", "answer": "Answer text"} '
        "Here's the document:\n\n"
        + document_text
    )


def build_cheatsheet_prompt(document_text: str) -> str:
    return f"""Create a comprehensive, well-structured cheatsheet based on the following document.
IMPORTANT: Return the response in plain text only without any special characters or formatting.

FORMAT RULES:
1. DO NOT use any markdown formatting
2. DO NOT use hashtags (#) for headings
3. DO NOT use asterisks (*) or hyphens (-) for bullet points
4. DO NOT use underscores, backticks, or any other special characters
5. Simply use numbers and letters for sections (e.g. '1.', 'a.', etc.)
6. Use all CAPS for main section titles
7. Use Title Case for subsection titles
8. Leave a blank line between sections

Include all key concepts, definitions, formulas, and critical information.
Make it visually scannable with consistent organization using only plain text.

Here's the document:

{document_text}"""


PROMPT_BUILDERS = {
    ContentKind.QUIZ: build_quiz_prompt,
    ContentKind.FLASHCARDS: build_flashcard_prompt,
    ContentKind.CHEATSHEET: build_cheatsheet_prompt,
}


def build_prompt(kind: ContentKind, document_text: str) -> str:
    return PROMPT_BUILDERS[ContentKind(kind)](document_text)
