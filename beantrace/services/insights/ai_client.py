# beantrace/services/insights/ai_client.py
"""
Thin client for the Gemini generateContent REST endpoint.

    POST {GEMINI_API_BASE}/models/{GEMINI_MODEL}:generateContent?key=...

One attempt per call. Without GEMINI_API_KEY callers are expected to use
their mock data instead (see `is_configured`).
"""
from __future__ import annotations

import json
import time
from typing import Any, Dict, Optional

import requests
from flask import current_app


class AIServiceError(Exception):
    pass


def is_configured() -> bool:
    return bool(current_app.config.get("GEMINI_API_KEY"))


def mock_pause() -> None:
    """Simulated latency for mock answers (AI_MOCK_DELAY seconds)."""
    delay = current_app.config.get("AI_MOCK_DELAY", 0)
    if delay:
        time.sleep(delay)


def _safe_json(resp: requests.Response) -> Optional[Dict[str, Any]]:
    """JSON dict if the body is JSON, else None (HTML gateway pages etc)."""
    try:
        data = resp.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else {"data": data}


def _extract_text(body: Dict[str, Any]) -> str:
    candidates = body.get("candidates") or []
    if not candidates:
        feedback = body.get("promptFeedback") or {}
        raise AIServiceError(f"No candidates returned (blockReason={feedback.get('blockReason', 'unknown')})")
    parts = (candidates[0].get("content") or {}).get("parts") or []
    text = "".join(p.get("text", "") for p in parts)
    if not text:
        raise AIServiceError("Empty response from model")
    return text


def generate_content(
    prompt: str,
    *,
    temperature: Optional[float] = None,
    top_p: Optional[float] = None,
    top_k: Optional[int] = None,
    response_schema: Optional[Dict[str, Any]] = None,
) -> str:
    cfg = current_app.config
    api_key = cfg.get("GEMINI_API_KEY")
    if not api_key:
        raise AIServiceError("GEMINI_API_KEY is not set")

    generation: Dict[str, Any] = {}
    if temperature is not None:
        generation["temperature"] = temperature
    if top_p is not None:
        generation["topP"] = top_p
    if top_k is not None:
        generation["topK"] = top_k
    if response_schema is not None:
        generation["responseMimeType"] = "application/json"
        generation["responseSchema"] = response_schema

    payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
    if generation:
        payload["generationConfig"] = generation

    url = f"{cfg['GEMINI_API_BASE']}/models/{cfg['GEMINI_MODEL']}:generateContent"
    try:
        resp = requests.post(url, params={"key": api_key}, json=payload, timeout=cfg.get("GEMINI_TIMEOUT", 30))
    except requests.RequestException as e:
        raise AIServiceError(f"Request to model failed: {e}") from e

    body = _safe_json(resp)
    if resp.status_code >= 400:
        msg = ((body or {}).get("error") or {}).get("message") or resp.text[:200]
        raise AIServiceError(f"Model returned HTTP {resp.status_code}: {msg}")
    if body is None:
        raise AIServiceError("Model returned a non-JSON body")
    return _extract_text(body)


def generate_json(prompt: str, response_schema: Dict[str, Any]) -> Dict[str, Any]:
    text = generate_content(prompt, response_schema=response_schema)
    try:
        data = json.loads(text)
    except ValueError as e:
        raise AIServiceError("Model returned malformed JSON") from e
    if not isinstance(data, dict):
        raise AIServiceError("Model returned JSON that is not an object")
    return data
