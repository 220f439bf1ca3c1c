"""Named constants for the Almas Enraizadas wellness blog."""

from enum import Enum

SITE_NAME = "Almas Enraizadas"

SITE_DESCRIPTION = (
    "Un espacio de bienestar, mindfulness y crecimiento personal. "
    "Raíces profundas para una vida plena."
)

SITE_TAGLINE = "Bienestar, Mindfulness y Crecimiento Personal"

SITE_LOCALE = "es_ES"

# Posts per page for listings
POSTS_PER_PAGE = 12

# Recent posts on the home page
HOME_RECENT_POSTS = 6

# Related posts under an article
RELATED_POSTS_LIMIT = 3

# Shared cache lifetime for rendered pages (seconds)
REVALIDATE_TIME = 60

WORDS_PER_MINUTE = 200

DEFAULT_EXCERPT_LENGTH = 160

ELLIPSIS = "…"


class SocialPlatform(str, Enum):
    """Social platform identifiers for share URLs."""

    TWITTER = "twitter"
    X = "x"
    FACEBOOK = "facebook"
    WHATSAPP = "whatsapp"
    LINKEDIN = "linkedin"


# Share buttons under each article: (platform, icon, label)
SHARE_PLATFORMS: tuple[tuple[SocialPlatform, str, str], ...] = (
    (SocialPlatform.X, "𝕏", "Compartir en X"),
    (SocialPlatform.FACEBOOK, "f", "Compartir en Facebook"),
    (SocialPlatform.WHATSAPP, "📱", "Compartir en WhatsApp"),
    (SocialPlatform.LINKEDIN, "in", "Compartir en LinkedIn"),
)

# Icons for author social links
SOCIAL_ICONS: dict[str, str] = {
    "twitter": "𝕏",
    "x": "𝕏",
    "facebook": "f",
    "instagram": "◎",
    "linkedin": "in",
    "youtube": "▶",
}

FOOTER_SOCIAL_LINKS: tuple[tuple[str, str], ...] = (
    ("Instagram", "https://instagram.com"),
    ("Facebook", "https://facebook.com"),
    ("YouTube", "https://youtube.com"),
)

COLOR_PALETTE: dict[str, str] = {
    "bg": "#f8f7f4",
    "text": "#6b6566",
    "contrast": "#4d4a49",
    "primary": "#8d9788",
    "secondary": "#c8ccbb",
    "neutral": "#dddbd6",
    "accent": "#b3adab",
}

ABOUT_VALUES: tuple[tuple[str, str], ...] = (
    (
        "Bienestar",
        "Promovemos prácticas que nutren cuerpo, mente y espíritu para "
        "alcanzar una vida plena y equilibrada.",
    ),
    (
        "Conexión",
        "Fomentamos vínculos auténticos con uno mismo, con los demás y con "
        "la naturaleza que nos rodea.",
    ),
    (
        "Crecimiento",
        "Acompañamos procesos de transformación personal a través del "
        "autoconocimiento y la reflexión consciente.",
    ),
    (
        "Naturaleza",
        "Nos inspiramos en los ciclos naturales para encontrar armonía, "
        "enraizarnos y florecer desde la autenticidad.",
    ),
)


def social_icon(platform: str) -> str:
    """Return the icon for a social platform, or a generic arrow."""
    return SOCIAL_ICONS.get(platform.lower(), "↗")
