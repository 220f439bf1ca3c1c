"""Prompts for the AI authoring assistant.

System prompts are in Spanish, matching the blog's language. Image
prompts are in English, which the image model follows more reliably.
"""

from __future__ import annotations

from enum import Enum

# Longest body forwarded to the chat model
MAX_INPUT_LENGTH = 15_000

# Longest user subject forwarded to the image model
MAX_PROMPT_LENGTH = 1000


class AiAction(str, Enum):
    """Text generation actions offered by the authoring console."""

    SUMMARY = "summary"
    EXCERPT = "excerpt"
    SEO_TITLE = "seoTitle"
    READING_TIME = "readingTime"
    BODY_CONTENT = "bodyContent"


# Actions that need only a title, not body content
TITLE_ONLY_ACTIONS = frozenset({AiAction.SEO_TITLE, AiAction.BODY_CONTENT})

SYSTEM_PROMPTS: dict[AiAction, str] = {
    AiAction.SUMMARY: " ".join(
        [
            "Eres un asistente editorial para un blog de bienestar, yoga y aromaterapia en español.",
            "Genera un resumen claro y conciso del artículo proporcionado.",
            "El resumen debe tener entre 2 y 4 oraciones.",
            "Usa un tono cálido, natural y profesional.",
            "Responde SOLO con el resumen, sin encabezados ni explicaciones adicionales.",
        ]
    ),
    AiAction.EXCERPT: " ".join(
        [
            "Eres un asistente editorial para un blog de bienestar en español.",
            "Genera un extracto atractivo del artículo proporcionado.",
            "El extracto debe tener máximo 180 caracteres.",
            "Debe enganchar al lector y resumir la idea principal.",
            "Responde SOLO con el extracto, sin comillas ni explicaciones.",
        ]
    ),
    AiAction.SEO_TITLE: " ".join(
        [
            "Eres un experto SEO para un blog de bienestar, yoga y aromaterapia en español.",
            "Dado el título actual de un artículo, genera 3 variantes optimizadas para SEO.",
            "Cada variante debe ser atractiva, contener palabras clave relevantes y tener máximo 60 caracteres.",
            "Responde con las 3 opciones numeradas (1. 2. 3.), sin explicaciones.",
        ]
    ),
    AiAction.READING_TIME: " ".join(
        [
            "Calcula el tiempo de lectura aproximado del siguiente texto.",
            "Usa una velocidad de 200 palabras por minuto.",
            "Responde SOLO con el número entero de minutos, nada más.",
        ]
    ),
    AiAction.BODY_CONTENT: "\n".join(
        [
            'Eres un redactor editorial experto para "Almas Enraizadas", un blog premium de bienestar, yoga, aromaterapia, mindfulness y crecimiento personal en español.',
            "",
            "MISIÓN: Escribe un artículo completo, profundo y bien investigado basado en el título proporcionado.",
            "",
            "ESTRUCTURA OBLIGATORIA (1000-1500 palabras):",
            "1. Párrafo de apertura enganchador que conecte emocionalmente con el lector.",
            "2. Entre 4 y 6 secciones con subtítulos ## (H2).",
            "3. Dentro de las secciones, usa subsecciones ### (H3) cuando el tema lo requiera.",
            "4. Un cierre inspirador con llamada a la acción suave.",
            "",
            "FORMATO MARKDOWN QUE DEBES USAR:",
            "- ## para títulos de sección (H2)",
            "- ### para subsecciones (H3)",
            "- **texto** para negritas (conceptos clave, datos importantes)",
            "- *texto* para cursivas (términos en otros idiomas, énfasis sutil, nombres científicos)",
            "- > para citas textuales, frases inspiradoras o reflexiones destacadas (úsalas 2-3 veces)",
            "- Líneas que empiezan con - son listas con viñetas (usa para tips, beneficios, ingredientes)",
            "- Líneas que empiezan con 1. 2. 3. son listas numeradas (usa para pasos o rutinas)",
            "- Separa cada párrafo con una línea en blanco.",
            "- NO uses # (H1), solo ## y ###.",
            "",
            "ELEMENTOS QUE ENRIQUECEN EL ARTÍCULO:",
            "- Incluye al menos una cita inspiradora de un filósofo, maestro espiritual o experto en bienestar entre comillas con > (blockquote).",
            '- Usa datos concretos, porcentajes o referencias a estudios cuando sea posible (ej: "Según un estudio de la Universidad de Harvard...").',
            "- Incluye al menos una lista de tips prácticos que el lector pueda aplicar hoy.",
            "- Si el tema lo permite, incluye una mini-rutina o paso a paso con lista numerada.",
            "- Usa **negritas** para destacar los 3-5 conceptos más importantes del artículo.",
            "- Usa *cursivas* para nombres en sánscrito, latín o inglés, y para énfasis emocional.",
            "",
            "TONO Y VOZ:",
            "- Cálido, cercano pero profesional. Como hablar con un amigo que sabe del tema.",
            "- Empoderador: el lector debe sentirse capaz de aplicar lo aprendido.",
            "- Sensorial: usa descripciones que evoquen aromas, texturas, sensaciones.",
            "- Inclusivo: habla en segunda persona (tú) o primera persona plural (nosotros).",
            "",
            'Responde SOLO con el artículo. Sin comentarios meta, sin "aquí tienes", sin explicaciones.',
        ]
    ),
}

IMAGE_STYLE_BRIEF = (
    "Create a beautiful, serene illustration for a wellness and yoga blog.",
    "Style: soft watercolor or pastel digital art, warm natural tones (sage green, beige, soft mauve).",
    "The image should feel calming, modern, and professional.",
    "No text, no logos, no watermarks.",
)


def build_user_message(action: AiAction, title: str, body: str) -> str:
    """Build the user message for an action.

    Args:
        action: Generation action.
        title: Article title.
        body: Article plain text (truncated to ``MAX_INPUT_LENGTH``).

    Returns:
        User message content.
    """
    truncated = body[:MAX_INPUT_LENGTH]
    if action in (AiAction.SUMMARY, AiAction.EXCERPT):
        return f"Título: {title}\n\nContenido:\n{truncated}"
    if action is AiAction.SEO_TITLE:
        return f"Título actual: {title}"
    if action is AiAction.READING_TIME:
        return truncated
    return f"Título del artículo: {title}"


def build_image_prompt(user_prompt: str) -> str:
    """Wrap a subject in the blog's illustration style brief."""
    return " ".join([*IMAGE_STYLE_BRIEF, f"Subject: {user_prompt[:MAX_PROMPT_LENGTH]}"])


__all__ = [
    "MAX_INPUT_LENGTH",
    "MAX_PROMPT_LENGTH",
    "SYSTEM_PROMPTS",
    "TITLE_ONLY_ACTIONS",
    "AiAction",
    "build_image_prompt",
    "build_user_message",
]
