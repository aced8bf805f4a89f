from __future__ import annotations

from typing import Any, Dict, List, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder
from langchain_google_genai import ChatGoogleGenerativeAI

from agent.core.memory import ConversationEntry
from agent.core.prompt import (
    AUTO_COMPLETE_PROMPT,
    GRAMMAR_PROMPT,
    ROLEPLAY_SYSTEM_PROMPT,
    THERAPIST_SYSTEM_PROMPT,
)
from config.settings import get_settings


def build_llm() -> ChatGoogleGenerativeAI:
    settings = get_settings()
    if not settings.google_api_key:
        raise RuntimeError(
            "GEMINI_API_KEY not set. Please configure it in environment or .env"
        )

    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.google_api_key,
        temperature=settings.temperature,
        top_p=settings.top_p,
    )


def to_lc_messages(history: Sequence[ConversationEntry]) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    for entry in history or []:
        if not entry.content:
            continue
        if entry.role == "ai":
            messages.append(AIMessage(content=entry.content))
        else:
            messages.append(HumanMessage(content=entry.content))
    return messages


def _invoke(prompt: ChatPromptTemplate, variables: Dict[str, Any]) -> str:
    chain = prompt | build_llm() | StrOutputParser()
    return chain.invoke(variables)


def correct_grammar(sentence: str) -> str:
    prompt = ChatPromptTemplate.from_messages([("human", GRAMMAR_PROMPT)])
    return _invoke(prompt, {"sentence": sentence})


def auto_complete(sentence: str) -> str:
    prompt = ChatPromptTemplate.from_messages([("human", AUTO_COMPLETE_PROMPT)])
    return _invoke(prompt, {"sentence": sentence})


def roleplay_reply(scenario: str, history: Sequence[ConversationEntry], message: str) -> str:
    prompt = ChatPromptTemplate.from_messages(
        [
            ("system", ROLEPLAY_SYSTEM_PROMPT),
            MessagesPlaceholder("chat_history", optional=True),
            ("human", "{message}"),
        ]
    )
    return _invoke(
        prompt,
        {
            "scenario": scenario,
            "chat_history": to_lc_messages(history),
            "message": message,
        },
    )


def therapist_reply(history: Sequence[ConversationEntry], message: str) -> str:
    prompt = ChatPromptTemplate.from_messages(
        [
            ("system", THERAPIST_SYSTEM_PROMPT),
            MessagesPlaceholder("chat_history", optional=True),
            ("human", "{message}"),
        ]
    )
    reply = _invoke(
        prompt,
        {"chat_history": to_lc_messages(history), "message": message},
    )
    return reply.strip()
