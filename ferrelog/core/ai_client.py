# ferrelog/core/ai_client.py
import logging
from functools import lru_cache

from openai import AsyncOpenAI

from ferrelog.core.config import get_settings
from ferrelog.core.zones import price_table_text

logger = logging.getLogger(__name__)

NOT_CONFIGURED_REPLY = "Servicio de IA no configurado."
EMPTY_REPLY = "No se pudo generar una respuesta."
ERROR_REPLY = "Error al conectar con la inteligencia artificial."


def system_instructions(store_name: str) -> str:
    """
    Fixed instructions for the logistics assistant, with the current
    zone price table embedded.
    """
    return (
        f"Eres un asistente experto en logística para {store_name}, una ferretería. "
        "Tus respuestas deben ser profesionales, concisas y en español. "
        "El sistema de precios se basa en distancia (KM): "
        f"{price_table_text()}. "
        "Ayudas con cálculos de costos, redacción de avisos para clientes "
        "y resolución de dudas de transporte."
    )


@lru_cache
def get_client() -> AsyncOpenAI:
    """
    Cached OpenAI client. Only called when OPENAI_API_KEY is set.
    """
    return AsyncOpenAI(api_key=get_settings().OPENAI_API_KEY)


async def get_logistics_advice(prompt: str) -> str:
    """
    Ask the assistant a free-text logistics question.

    Never raises: returns a fixed fallback message when the key is
    missing, the model answers with nothing, or the call fails.
    """
    settings = get_settings()
    if not settings.OPENAI_API_KEY:
        return NOT_CONFIGURED_REPLY

    messages = [
        {"role": "system", "content": system_instructions(settings.STORE_NAME)},
        {"role": "user", "content": prompt},
    ]

    try:
        response = await get_client().chat.completions.create(
            model=settings.OPENAI_MODEL,
            messages=messages,
        )
    except Exception:
        logger.exception("Logistics assistant request failed")
        return ERROR_REPLY

    if not response.choices:
        return EMPTY_REPLY
    return response.choices[0].message.content or EMPTY_REPLY
