"""Static feed catalogue and keyword taxonomy."""

# Recency edition: every feed carries the label of the group it is listed under.
GROUPED_FEEDS: dict[str, list[str]] = {
    "综合资讯": [
        "https://techcrunch.com/feed/",
        "https://www.theverge.com/rss/index.xml",
        "https://feeds.arstechnica.com/arstechnica/technology-lab",
        "https://www.wired.com/feed/rss",
        "https://venturebeat.com/feed/",
    ],
    "金属材料": [
        "https://chipsandcheese.com/feed/",
        "https://www.tomshardware.com/feeds/all",
        "https://www.eetimes.com/feed/",
    ],
    "非金属材料": [
        "https://www.technologyreview.com/feed/",
        "https://www.carbon-fiber.eu/feed/",
        "https://www.automotiveworld.com/feed/",
    ],
    "汽车防腐": [
        "https://www.european-coatings.com/rss",
        "https://www.automotiveworld.com/feed/",
    ],
    "车内健康": [
        "https://www.sustainablebrands.com/rss",
        "https://www.automotiveworld.com/feed/",
    ],
    "紧固件": [
        "https://www.automotiveworld.com/feed/",
    ],
    "环保合规": [
        "https://www.sustainablebrands.com/rss",
        "https://www.automotiveworld.com/feed/",
    ],
}

# Keyword edition: unlabelled feeds, categories come from keyword matching.
KEYWORD_FEEDS: list[str] = [
    "https://www.automotiveworld.com/feed/",
    "https://www.carbon-fiber.eu/feed/",
    "https://www.european-coatings.com/rss",
    "https://www.sustainablebrands.com/rss",
    "https://www.technologyreview.com/feed/",
    "https://www.sae.org/news/rss",
    "https://www.compositesworld.com/rss",
    "https://www.plasticstoday.com/rss.xml",
]

# Declaration order is the tie-break order when two categories score the same.
CATEGORY_KEYWORDS: dict[str, dict[str, list[str]]] = {
    "材料创新": {
        "include": [
            # metals
            "aluminum", "aluminium", "steel", "alloy", "metal", "titanium",
            "magnesium", "lightweight metal", "automotive metal",
            # non-metals
            "carbon fiber", "carbon fibre", "composite", "plastic", "polymer",
            "automotive plastic", "thermoplastic", "resin", "fiber glass",
            "fiberglass",
        ],
        "exclude": ["semiconductor", "chip", "processor", "cpu", "gpu"],
    },
    "汽车防腐": {
        "include": [
            "corrosion", "anti-corrosion", "coating", "paint",
            "surface treatment", "rust", "galvaniz", "cathodic protection",
            "automotive coating",
        ],
        "exclude": [],
    },
    "车内健康": {
        "include": [
            "formaldehyde", "voc", "volatile organic", "odor", "odour",
            "low-odor", "interior material", "cabin air", "air quality",
            "low-emission", "indoor air", "emission", "toxic", "health",
            "safety", "cleanroom", "antimicrobial", "antibacterial",
            "hypoallergenic", "eco-friendly", "non-toxic", "green material",
            "sustainable interior", "bio-based", "natural fiber",
            "recycled fabric", "breathable", "ventilation",
        ],
        "exclude": [],
    },
}
