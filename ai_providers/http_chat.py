# ai_providers/http_chat.py
import requests


def post_json(url: str, payload: dict, headers: dict = None, params: dict = None, timeout: float = 120) -> dict:
    r = requests.post(url, json=payload, headers=headers or {}, params=params, timeout=timeout)
    r.raise_for_status()
    return r.json()


def post_chat_completion(url: str, api_key: str, payload: dict, timeout: float = 120) -> str:
    """OpenAI-compatible /chat/completions call; returns the first message text."""
    data = post_json(
        url,
        payload,
        headers={"Content-Type": "application/json", "Authorization": f"Bearer {api_key}"},
        timeout=timeout,
    )
    choice = (data.get("choices") or [{}])[0]
    return (choice.get("message") or {}).get("content") or ""


def error_detail(e: Exception) -> str:
    """Vendor error message from an HTTP error body when there is one."""
    resp = getattr(e, "response", None)
    if resp is not None:
        try:
            body = resp.json()
            err = body.get("error") if isinstance(body, dict) else None
            if isinstance(err, dict) and err.get("message"):
                return err["message"]
            if isinstance(err, str):
                return err
        except ValueError:
            pass
    return str(e)
