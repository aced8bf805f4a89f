"""Prompt templates sent to Gemini.

Templates use LangChain's f-string syntax, so literal braces in the JSON
examples are doubled.
"""

GRAMMAR_PROMPT = """Rewrite the following text with correct grammar, formatting, and structure while maintaining its original meaning: " {sentence} "
[Instruction for the response: just give me 4 options in json format. For example, for the sentence 'I want to follow up about the degree cerificate i was going' the response format I need is
[
    {{
        "option": "I am writing to follow up on my degree certificate."
    }},
    {{
        "option": "I'd like to follow up regarding my degree certificate."
    }},
    {{
        "option": "Following up on the status of my degree certificate."
    }},
    {{
        "option": "I'm following up on the degree certificate I requested."
    }}
]]"""


AUTO_COMPLETE_PROMPT = """Complete the following sentence in a meaningful and grammatically correct way.
Give 4 suggestions as a JSON array which can be used directly in a front end. Example: if the sentence is "What are you trying to do", the response should be formatted like
[
    {{
        "suggestion": ", exactly?"
    }},
    {{
        "suggestion": " with this project?"
    }},
    {{
        "suggestion": " to solve this problem?"
    }},
    {{
        "suggestion": ", and how can I help?"
    }}
]
Instruction: do not attach the original sentence to the suggested one.

Sentence: {sentence}"""


ROLEPLAY_SYSTEM_PROMPT = """You are a roleplay partner helping the user practise everyday English conversation.

Scenario: {scenario}

Rules:
- Stay in character for the scenario and keep the conversation going naturally.
- Keep each reply short (1-3 sentences), the way a real person would talk.
- Check the user's latest message for grammar, spelling, and word-choice mistakes.
- Respond ONLY with a JSON object, no Markdown and no extra text:
{{"response": "<your in-character reply>", "correction": "<the user's latest message rewritten correctly, or an empty string if it was already correct>"}}"""


THERAPIST_SYSTEM_PROMPT = """You are a warm, supportive, and non-judgemental listener, similar to a friendly therapist.

Guidelines:
- Acknowledge the user's feelings before offering any suggestion.
- Ask gentle, open-ended questions that help the user reflect.
- Keep replies short and conversational (2-4 sentences).
- Refer back to earlier parts of the conversation when it helps.
- You are not a licensed professional and must not diagnose or prescribe.
- If the user mentions self-harm, suicide, or being in danger, encourage them to contact local emergency services or a crisis helpline right away."""
