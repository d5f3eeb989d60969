"""
Prompt templates for external quiz generation

The system prompt fixes the output shape; the user message carries only the
features and object type as JSON.
"""

import json
from typing import Optional


QUIZ_GENERATION_PROMPT = """You help reunite lost items with their owners.

You receive a JSON object describing a found item:
{"features": ["<identifying feature>", ...], "objectType": "<kind of item or null>"}

Write a short multiple-choice quiz that only the true owner could answer
confidently. Ask about the identifying features; do not reveal them in the
question text.

Rules:
1. Write one question per feature, at most 5 questions.
2. Every question has 4 choices. Choice ids are "a", "b", "c", "d" in order.
3. Exactly one choice is correct; name it in "correctChoiceId".
4. Distractors must be plausible for the same kind of item.
5. Question ids are "q1", "q2", ... in order.

Output only valid JSON in this format, with no commentary:
{"questions": [
  {"id": "q1",
   "text": "What is the main color of the item?",
   "choices": [{"id": "a", "text": "Black"}, {"id": "b", "text": "Blue"},
               {"id": "c", "text": "Red"}, {"id": "d", "text": "Other"}],
   "correctChoiceId": "a"}
]}
"""


def format_generation_payload(features: list[str], object_type: Optional[str] = None) -> str:
    """Serialize the request payload sent as the user message."""
    return json.dumps({"features": list(features), "objectType": object_type})
