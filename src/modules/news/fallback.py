from collections.abc import Mapping
from datetime import datetime, timezone
from types import MappingProxyType

from src.modules.news.catalog import DEFAULT_CATEGORY
from src.modules.news.schemas import NO_URL, NormalizedArticle

LOADED_AT = datetime.now(timezone.utc)

_IMAGE = "https://via.placeholder.com/600x400?text={}"

# (id, title, snippet, image caption, source)
_RAW: dict[str, list[tuple[str, str, str, str, str]]] = {
    "general": [
        ("fallback_gen_1", "Breaking: Major Policy Announcement Expected",
         "Government officials hint at significant policy changes in upcoming session.",
         "Breaking+News", "Newszoid"),
        ("fallback_gen_2", "Technology Sector Shows Strong Growth",
         "Tech companies report record revenues as digital transformation accelerates.",
         "Tech+Growth", "Newszoid"),
    ],
    "india": [
        ("fallback_in_1", "Supreme Court Reviews Constitutional Amendments",
         "The Supreme Court of India examines petitions challenging recent constitutional changes.",
         "Supreme+Court", "Newszoid India"),
        ("fallback_in_2", "Parliament Passes Digital Privacy Bill",
         "Landmark legislation aims to protect citizen data rights in digital age.",
         "Parliament", "Newszoid India"),
        ("fallback_in_3", "Infrastructure Development Gets Major Boost",
         "Government announces new funding for roads, railways, and urban infrastructure.",
         "Infrastructure", "Newszoid India"),
    ],
    "world": [
        ("fallback_world_1", "Climate Summit Reaches Historic Agreement",
         "Global leaders commit to new climate fund and emission reduction targets.",
         "Climate+Summit", "Global News"),
        ("fallback_world_2", "International Trade Agreements Signed",
         "Major economies finalize new trade partnerships to boost economic cooperation.",
         "Trade", "Global News"),
    ],
    "business": [
        ("fallback_biz_1", "Stock Markets Hit Record Highs",
         "Major indices surge as investor confidence strengthens amid positive earnings.",
         "Stock+Market", "Newszoid Business"),
        ("fallback_biz_2", "Startup Ecosystem Attracts Record Investment",
         "Venture capital funding reaches new heights in technology and innovation sectors.",
         "Startups", "Newszoid Business"),
    ],
    "technology": [
        ("fallback_tech_1", "AI Revolution Transforms Industries",
         "Artificial intelligence adoption accelerates across healthcare, finance, and manufacturing.",
         "AI", "Tech Daily"),
        ("fallback_tech_2", "Quantum Computing Breakthrough Announced",
         "Research teams achieve major milestone in quantum processor development.",
         "Quantum", "Tech Daily"),
    ],
    "sports": [
        ("fallback_sport_1", "Cricket World Cup Final Approaches",
         "Teams prepare for high-stakes championship match as fans worldwide anticipate.",
         "Cricket", "Sports Today"),
        ("fallback_sport_2", "Olympic Athletes Break Records",
         "Multiple world records fall as competition intensifies at international games.",
         "Olympics", "Sports Today"),
    ],
    "environment": [
        ("fallback_env_1", "Renewable Energy Costs Continue to Drop",
         "Solar and wind power become most economical electricity sources globally.",
         "Renewable+Energy", "EcoWorld"),
        ("fallback_env_2", "Forest Conservation Efforts Expand",
         "New initiatives aim to protect biodiversity and combat deforestation.",
         "Forest", "EcoWorld"),
    ],
    "education": [
        ("fallback_edu_1", "Education Reform Focuses on Digital Skills",
         "Curriculum updates emphasize technology literacy and critical thinking.",
         "Education", "Education Today"),
        ("fallback_edu_2", "Universities Launch New Research Programs",
         "Academic institutions expand offerings in emerging fields and interdisciplinary studies.",
         "University", "Education Today"),
    ],
    "health": [
        ("fallback_health_1", "Medical Breakthrough in Cancer Treatment",
         "New therapy shows promising results in clinical trials for multiple cancer types.",
         "Medical+Research", "Health News"),
        ("fallback_health_2", "Mental Health Awareness Programs Expand",
         "Communities invest in accessible mental health services and support systems.",
         "Mental+Health", "Health News"),
    ],
    "science": [
        ("fallback_sci_1", "Space Mission Discovers New Exoplanets",
         "Telescope identifies potentially habitable worlds in distant star systems.",
         "Space", "Science Daily"),
        ("fallback_sci_2", "Particle Physics Experiment Yields Surprising Results",
         "Researchers detect unexpected phenomena in high-energy collider experiments.",
         "Physics", "Science Daily"),
    ],
    "economy": [
        ("fallback_econ_1", "Central Bank Maintains Interest Rates",
         "Monetary policy remains steady as inflation shows signs of stabilization.",
         "Economy", "Economic Times"),
        ("fallback_econ_2", "GDP Growth Exceeds Expectations",
         "Economic expansion accelerates driven by consumer spending and investments.",
         "GDP", "Economic Times"),
    ],
    "legal": [
        ("fallback_legal_1", "High Court Delivers Landmark Judgment",
         "Decision sets important precedent for civil rights and constitutional law.",
         "Court", "Legal News"),
        ("fallback_legal_2", "New Legislation Addresses Digital Rights",
         "Laws updated to reflect modern challenges in privacy and data protection.",
         "Law", "Legal News"),
    ],
    "culture": [
        ("fallback_culture_1", "Film Festival Showcases International Cinema",
         "Diverse storytelling from around the world celebrated at annual event.",
         "Film+Festival", "Culture Beat"),
        ("fallback_culture_2", "Museum Exhibition Explores Ancient Civilizations",
         "Artifacts and interactive displays bring history to life for visitors.",
         "Museum", "Culture Beat"),
    ],
}

FALLBACK_NEWS: Mapping[str, tuple[NormalizedArticle, ...]] = MappingProxyType({
    category: tuple(
        NormalizedArticle(
            id=article_id,
            title=title,
            snippet=snippet,
            url=NO_URL,
            image=_IMAGE.format(caption),
            published_at=LOADED_AT,
            source=source,
            category=category,
        )
        for article_id, title, snippet, caption, source in rows
    )
    for category, rows in _RAW.items()
})


def get_fallback(category: str) -> list[NormalizedArticle]:
    """Canned articles for a category, or the general set when it is unknown."""
    return list(FALLBACK_NEWS.get(category) or FALLBACK_NEWS[DEFAULT_CATEGORY])


def get_local_fallback(location: str, now: datetime | None = None) -> list[NormalizedArticle]:
    return [
        NormalizedArticle(
            id="local_fallback_1",
            title=f"{location} Metro expansion plans announced",
            snippet="Local authorities have approved new infrastructure projects.",
            url=NO_URL,
            image=_IMAGE.format("Local+News"),
            published_at=now or datetime.now(timezone.utc),
            source="Newszoid Local",
            category="local",
        )
    ]
