"""Read-only word tables and template banks used by the highlight pipeline.

Tables are built once at import time and passed into each stage as a
`Lexicon`; nothing here is mutated while serving a request.
"""
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Tuple

DEFAULT_LANGUAGE = "en"
DEFAULT_TONE = "neutral"


@dataclass(frozen=True)
class CaptionStyle:
    """Preset/animation/color triple for on-screen captions."""
    preset: str
    animation: str
    background: str
    foreground: str
    accent: str

    def to_dict(self) -> dict:
        return {
            "preset": self.preset,
            "animation": self.animation,
            "colors": {
                "background": self.background,
                "foreground": self.foreground,
                "accent": self.accent,
            },
        }


@dataclass(frozen=True)
class Lexicon:
    """All language-dependent tables for one language."""
    language: str
    stopwords: FrozenSet[str]
    question_words: FrozenSet[str]
    number_words: FrozenSet[str]
    superlatives: FrozenSet[str]
    attention_terms: FrozenSet[str]
    # Category -> trigger words; tuple order is the tie-break priority
    tone_lexicon: Tuple[Tuple[str, FrozenSet[str]], ...]
    cta_bank: Tuple[str, ...]
    broll_templates: Tuple[str, ...]
    broll_fallback_keyword: str
    hook_fallback: str
    platform_tags: Tuple[str, ...]
    caption_styles: Tuple[CaptionStyle, ...] = field(default_factory=tuple)

    @property
    def tone_priority(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.tone_lexicon)


CAPTION_STYLES = (
    CaptionStyle("bold-pop", "pop-in", "#111827", "#FFFFFF", "#FACC15"),
    CaptionStyle("karaoke", "word-highlight", "#0F172A", "#F8FAFC", "#22D3EE"),
    CaptionStyle("minimal", "fade", "#00000000", "#FFFFFF", "#A78BFA"),
    CaptionStyle("headline", "slide-up", "#DC2626", "#FFFFFF", "#FDE68A"),
)


ENGLISH = Lexicon(
    language="en",
    stopwords=frozenset("""
        a about above after again against all also am an and any are aren't as at
        be because been before being below between both but by can can't cannot
        could couldn't did didn't do does doesn't doing don't down during each few
        for from further get gets getting go going gonna got had hadn't has hasn't
        have haven't having he he'd he'll he's her here here's hers herself him
        himself his how how's i i'd i'll i'm i've if in into is isn't it it's its
        itself just kind know let's like lot me more most mustn't my myself no nor
        not now of off ok okay on once one only or other ought our ours ourselves
        out over own pretty really right said same say says she she'd she'll she's
        should shouldn't so some something such than that that's the their theirs
        them themselves then there there's these they they'd they'll they're
        they've thing things think this those through to too um uh under until up
        us very want was wasn't way we we'd we'll we're we've well were weren't
        what what's when when's where where's which while who who's whom why why's
        will with won't would wouldn't yeah yes you you'd you'll you're you've
        your yours yourself yourselves
    """.split()),
    question_words=frozenset(
        "what why how when where who which whose whom".split()
    ),
    number_words=frozenset(
        "one two three four five six seven eight nine ten hundred thousand million billion".split()
    ),
    superlatives=frozenset("""
        best worst biggest greatest most least fastest easiest hardest simplest
        craziest smartest largest smallest highest lowest ultimate top
    """.split()),
    attention_terms=frozenset("""
        secret secrets never mistake mistakes truth hack hacks proven shocking
        surprising nobody everyone always stop warning insane crazy hidden
        myth myths lie lies wrong actually exactly problem fail failed
        changed must free
    """.split()),
    tone_lexicon=(
        ("educational", frozenset("""
            learn learning explain explains understand lesson step steps process
            example examples research study studies data because framework
            method guide tutorial concept
        """.split())),
        ("energetic", frozenset("""
            amazing awesome incredible insane crazy love excited exciting huge
            epic wow unbelievable fantastic
        """.split())),
        ("dramatic", frozenset("""
            never secret truth shocking terrible disaster fear dark lost failed
            fail danger dangerous worst betrayed
        """.split())),
        ("conversational", frozenset("""
            guys honestly basically literally yeah okay anyway kinda
            friend friends chat talk
        """.split())),
    ),
    cta_bank=(
        "Follow for more insights like this.",
        "Share this with someone who needs to hear it.",
        "Drop your take in the comments.",
        "Save this so you don't forget it.",
        "Watch the full video for the complete story.",
    ),
    broll_templates=(
        "Close-up shot illustrating {keyword}",
        "Animated text overlay highlighting \"{keyword}\"",
        "Stock footage montage related to {keyword}",
        "Quick cutaway to an on-screen graphic about {keyword}",
    ),
    broll_fallback_keyword="the speaker's main point",
    hook_fallback="Wait for this: {text}",
    platform_tags=("#shorts", "#viral"),
    caption_styles=CAPTION_STYLES,
)


SPANISH = Lexicon(
    language="es",
    stopwords=frozenset("""
        a al algo algunos ante antes como con contra cual cuando de del desde
        donde durante e el ella ellas ellos en entre era eres es esa ese eso esta
        estaba estamos estar este esto estos fue fueron ha hay la las le les lo
        los me mi mis mucho muy más nada ni no nos nosotros o os para pero poco
        por porque que quien se ser si sin sobre son su sus también te tiene
        tengo todo todos tu tus un una uno unos y ya yo
    """.split()),
    question_words=frozenset(
        "qué cómo cuándo dónde quién cuál cuánto".split()
    ),
    number_words=frozenset(
        "uno dos tres cuatro cinco seis siete ocho nueve diez cien mil millón".split()
    ),
    superlatives=frozenset("""
        mejor peor máximo mínimo mayor menor increíble
    """.split()),
    attention_terms=frozenset("""
        secreto secretos nunca error errores verdad truco trucos nadie siempre
        cuidado mentira problema realmente
    """.split()),
    tone_lexicon=(
        ("educational", frozenset("""
            aprender explicar entender lección paso pasos proceso ejemplo estudio
            datos método guía concepto
        """.split())),
        ("energetic", frozenset("""
            increíble genial impresionante amor emocionante enorme épico vamos
        """.split())),
        ("dramatic", frozenset("""
            nunca secreto verdad terrible desastre miedo oscuro perdido peligro
        """.split())),
        ("conversational", frozenset("""
            chicos honestamente básicamente literalmente bueno oye
            amigo amigos hablar
        """.split())),
    ),
    cta_bank=(
        "Sígueme para más contenido como este.",
        "Compártelo con alguien que necesite escucharlo.",
        "Deja tu opinión en los comentarios.",
        "Guárdalo para no olvidarlo.",
        "Mira el video completo para toda la historia.",
    ),
    broll_templates=(
        "Primer plano que ilustre {keyword}",
        "Texto animado destacando \"{keyword}\"",
        "Montaje de imágenes relacionadas con {keyword}",
        "Gráfico en pantalla sobre {keyword}",
    ),
    broll_fallback_keyword="la idea principal",
    hook_fallback="Atento a esto: {text}",
    platform_tags=("#shorts", "#viral"),
    caption_styles=CAPTION_STYLES,
)


LEXICONS: Dict[str, Lexicon] = {
    ENGLISH.language: ENGLISH,
    SPANISH.language: SPANISH,
}


def get_lexicon(language: Optional[str] = None) -> Lexicon:
    """
    Resolve a lexicon by language tag.

    Matches on the primary subtag ("es-MX" -> "es"); unknown or missing
    languages fall back to English.
    """
    if not language:
        return LEXICONS[DEFAULT_LANGUAGE]
    primary = language.strip().replace("_", "-").split("-")[0].lower()
    return LEXICONS.get(primary, LEXICONS[DEFAULT_LANGUAGE])
