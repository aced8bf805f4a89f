from __future__ import annotations

from typing import Dict, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
import logging
from pydantic import BaseModel, Field, ValidationError

from agent import agent as gemini
from agent.core.memory import ConversationStore, roleplay_store, therapist_store
from agent.core.parsing import parse_roleplay_reply
from app.errors import APIError, api_error_handler, validation_error_handler
from config.settings import get_settings


settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="[%(asctime)s] %(levelname)s - %(message)s",
)
logger = logging.getLogger("writing_agent")

app = FastAPI(title="Writing Assistant AI Agent", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_exception_handler(APIError, api_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

MODEL_ERROR = "AI model error"


class SentenceRequest(BaseModel):
    sentence: Optional[str] = Field(None, description="Text to correct or complete")


class RoleplayRequest(BaseModel):
    userId: Optional[str] = Field(None, description="Caller identifier used to key history")
    scenario: Optional[str] = Field(None, description="Situation the AI plays along with")
    message: Optional[str] = Field(None, description="User's latest message")


class TherapistRequest(BaseModel):
    userId: Optional[str] = Field(None, description="Caller identifier used to key history")
    message: Optional[str] = Field(None, description="User's latest message")


class ResetRequest(BaseModel):
    userId: Optional[str] = Field(None, description="Reset only this user; omit to reset everyone")


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _require_sentence(req: Optional[SentenceRequest]) -> str:
    if req is None or _blank(req.sentence):
        raise APIError(400, "Sentence is required", "Field 'sentence' must be a non-empty string")
    return req.sentence


def _reset(store: ConversationStore, user_id: Optional[str], label: str) -> Dict[str, str]:
    if not _blank(user_id):
        if not store.reset(user_id):
            raise APIError(404, "User not found", f"No {label} history for userId '{user_id}'")
        return {"message": f"{label.capitalize()} history for user {user_id} has been reset."}
    store.reset_all()
    return {"message": f"All {label} histories have been reset."}


@app.post("/correct-grammar")
def correct_grammar(req: Optional[SentenceRequest] = None) -> Dict[str, str]:
    sentence = _require_sentence(req)
    try:
        logger.info("Grammar correction: sentence_len=%s", len(sentence))
        corrected = gemini.correct_grammar(sentence)
    except Exception as e:
        logger.exception("Grammar correction failed: %s", e)
        raise APIError(500, MODEL_ERROR, str(e))
    return {"correctedSentence": corrected}


@app.post("/auto-complete")
def auto_complete(req: Optional[SentenceRequest] = None) -> Dict[str, str]:
    sentence = _require_sentence(req)
    try:
        logger.info("Auto-complete: sentence_len=%s", len(sentence))
        completed = gemini.auto_complete(sentence)
    except Exception as e:
        logger.exception("Auto-complete failed: %s", e)
        raise APIError(500, MODEL_ERROR, str(e))
    return {"completedSentence": completed}


@app.post("/roleplay")
def roleplay(req: Optional[RoleplayRequest] = None) -> Dict[str, Dict[str, str]]:
    req = req or RoleplayRequest()
    if _blank(req.userId) or _blank(req.scenario) or _blank(req.message):
        raise APIError(
            400,
            "userId, scenario, and message are required",
            "Fields 'userId', 'scenario' and 'message' must be non-empty strings",
        )

    history = roleplay_store.history(req.userId)
    logger.info(
        "Incoming roleplay: user_id=%s scenario_len=%s history_entries=%s",
        req.userId,
        len(req.scenario),
        len(history),
    )
    try:
        raw = gemini.roleplay_reply(req.scenario, history, req.message)
    except Exception as e:
        logger.exception("Roleplay model call failed: %s", e)
        raise APIError(500, MODEL_ERROR, str(e))

    try:
        reply = parse_roleplay_reply(raw)
    except (ValueError, ValidationError) as e:
        logger.exception("Could not parse roleplay reply (%s chars): %s", len(raw or ""), e)
        raise APIError(500, "Failed to parse AI response", str(e))

    roleplay_store.append_exchange(req.userId, req.message, reply.response)
    return {"roleplayResponse": reply.model_dump()}


@app.post("/reset-history")
def reset_history(req: Optional[ResetRequest] = None) -> Dict[str, str]:
    req = req or ResetRequest()
    return _reset(roleplay_store, req.userId, "roleplay")


@app.post("/therapist-chat")
def therapist_chat(req: Optional[TherapistRequest] = None) -> Dict[str, str]:
    req = req or TherapistRequest()
    if _blank(req.userId) or _blank(req.message):
        raise APIError(
            400,
            "userId and message are required",
            "Fields 'userId' and 'message' must be non-empty strings",
        )

    history = therapist_store.history(req.userId)
    logger.info(
        "Incoming therapist chat: user_id=%s message_len=%s history_entries=%s",
        req.userId,
        len(req.message),
        len(history),
    )
    try:
        reply = gemini.therapist_reply(history, req.message)
    except Exception as e:
        logger.exception("Therapist model call failed: %s", e)
        raise APIError(500, MODEL_ERROR, str(e))

    therapist_store.append_exchange(req.userId, req.message, reply)
    return {"therapistResponse": reply}


@app.post("/therapist-reset")
def therapist_reset(req: Optional[ResetRequest] = None) -> Dict[str, str]:
    req = req or ResetRequest()
    return _reset(therapist_store, req.userId, "therapist")


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    logger.info("AI Agent running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
