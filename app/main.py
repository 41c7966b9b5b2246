from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import uvicorn

from coach.core.schemas import ChatError, ChatReply, ChatRequest
from coach.errors import CoachError, MissingCredentialError
from coach.gateway import CompletionGateway
from config.settings import get_settings


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("interview_coach")

app = FastAPI(title="Interview Coach Chat Gateway", version="1.0.0")

# CORS: allow local frontend during development
settings = get_settings()
if settings.is_dev:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

if not settings.google_api_key:
    logger.error("GOOGLE_API_KEY is missing; /api/chat will answer 500 until it is set")


@lru_cache(maxsize=1)
def get_gateway() -> CompletionGateway:
    return CompletionGateway.from_settings(get_settings())


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content=ChatError(error=message).model_dump())


@app.post(
    "/api/chat",
    response_model=ChatReply,
    responses={500: {"model": ChatError}},
)
def chat(req: ChatRequest, gateway: CompletionGateway = Depends(get_gateway)):
    logger.info(
        "Incoming chat: type=%r level=%r messages=%s key_set=%s",
        req.config.focus_area,
        req.config.level,
        len(req.messages),
        gateway.credential_configured,
    )
    try:
        reply = gateway.handle_turn(req.messages, req.config)
    except MissingCredentialError as e:
        logger.error("Rejected chat request: %s", e)
        return _error(str(e))
    except CoachError as e:
        # Already logged by the gateway
        return _error(str(e) or "Unknown server error")
    except Exception as e:
        logger.exception("Chat processing failed: %s", e)
        return _error(str(e) or "Unknown server error")

    return ChatReply(reply=reply)


@app.get("/health")
def health(gateway: CompletionGateway = Depends(get_gateway)) -> Dict[str, Any]:
    return {"status": "ok", "credential_configured": gateway.credential_configured}


def serve() -> None:
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
