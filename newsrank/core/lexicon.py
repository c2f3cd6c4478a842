"""
Category and subcategory lexicon for newsrank.

The lexicon is plain data: category identifiers, their display metadata and
the keyword lists the classifier matches against. A ``Lexicon`` is built once
(usually with ``load_lexicon``) and handed to the classifier explicitly.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


class Category(str, Enum):
    """
    Closed set of main news categories, in classification order.
    """
    GENERAL = "general"
    TECHNOLOGY = "technology"
    BUSINESS = "business"
    SCIENCE = "science"
    HEALTH = "health"
    SPORTS = "sports"
    ENTERTAINMENT = "entertainment"
    POLITICS = "politics"
    WORLD = "world"
    LOCAL = "local"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Category":
        """Lenient lookup; anything unrecognised becomes GENERAL."""
        if isinstance(value, Category):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.GENERAL


@dataclass(frozen=True)
class CategoryInfo:
    display_name: str
    icon: str
    color: str
    description: str


@dataclass(frozen=True)
class Subcategory:
    id: str
    display_name: str
    icon: str
    keywords: Tuple[str, ...]


CATEGORY_INFO: Mapping[Category, CategoryInfo] = MappingProxyType({
    Category.GENERAL: CategoryInfo("General", "newspaper", "gray", "General news and current events"),
    Category.TECHNOLOGY: CategoryInfo("Technology", "laptopcomputer", "purple",
                                      "Technology, gadgets, software, and digital innovation"),
    Category.BUSINESS: CategoryInfo("Business", "briefcase", "blue",
                                    "Business, finance, economy, and corporate news"),
    Category.SCIENCE: CategoryInfo("Science", "atom", "green",
                                   "Scientific research, discoveries, and academic news"),
    Category.HEALTH: CategoryInfo("Health", "heart", "red",
                                  "Health, medicine, wellness, and medical research"),
    Category.SPORTS: CategoryInfo("Sports", "sportscourt", "orange",
                                  "Sports, athletics, and competitive events"),
    Category.ENTERTAINMENT: CategoryInfo("Entertainment", "tv", "pink",
                                         "Entertainment, movies, music, and celebrity news"),
    Category.POLITICS: CategoryInfo("Politics", "building.2", "indigo",
                                    "Political news, government, and policy"),
    Category.WORLD: CategoryInfo("World", "globe", "teal", "International news and global events"),
    Category.LOCAL: CategoryInfo("Local", "location", "mint", "Local news and community events"),
})

CATEGORY_KEYWORDS: Dict[Category, List[str]] = {
    Category.GENERAL: [],
    Category.TECHNOLOGY: [
        'technology', 'tech', 'software', 'hardware', 'digital', 'computer', 'internet',
        'ai', 'artificial intelligence', 'app', 'gadget', 'device', 'innovation', 'startup',
        'cybersecurity', 'blockchain', 'cloud', 'data', 'programming', 'coding', 'development'
    ],
    Category.BUSINESS: [
        'business', 'finance', 'economy', 'market', 'stock', 'investment', 'corporate',
        'company', 'revenue', 'profit', 'earnings', 'trading', 'banking', 'startup',
        'entrepreneur', 'ceo', 'cfo', 'ipo', 'merger', 'acquisition'
    ],
    Category.SCIENCE: [
        'science', 'research', 'study', 'discovery', 'experiment', 'scientific', 'physics',
        'chemistry', 'biology', 'astronomy', 'space', 'climate', 'environment', 'laboratory',
        'scientist', 'researcher', 'findings', 'hypothesis', 'theory'
    ],
    Category.HEALTH: [
        'health', 'medical', 'medicine', 'doctor', 'patient', 'hospital', 'disease',
        'treatment', 'therapy', 'vaccine', 'drug', 'pharmaceutical', 'wellness', 'fitness',
        'nutrition', 'mental health', 'covid', 'pandemic', 'surgery'
    ],
    Category.SPORTS: [
        'sports', 'game', 'match', 'player', 'team', 'championship', 'tournament',
        'olympics', 'football', 'basketball', 'soccer', 'baseball', 'tennis', 'golf',
        'athlete', 'coach', 'score', 'victory', 'defeat'
    ],
    Category.ENTERTAINMENT: [
        'entertainment', 'movie', 'film', 'music', 'celebrity', 'actor', 'singer', 'artist',
        'show', 'series', 'tv', 'television', 'award', 'oscar', 'grammy', 'festival',
        'concert', 'theater', 'broadway'
    ],
    Category.POLITICS: [
        'politics', 'political', 'government', 'election', 'vote', 'president', 'senator',
        'congress', 'parliament', 'policy', 'law', 'bill', 'legislation', 'democrat',
        'republican', 'campaign', 'candidate', 'minister', 'prime minister'
    ],
    Category.WORLD: [
        'world', 'international', 'global', 'country', 'nation', 'foreign', 'diplomacy',
        'trade', 'war', 'peace', 'conflict', 'crisis', 'summit', 'treaty', 'united nations',
        'nato', 'european union', 'brexit'
    ],
    Category.LOCAL: [
        'local', 'city', 'town', 'community', 'neighborhood', 'municipal', 'mayor',
        'council', 'police', 'fire', 'school', 'hospital', 'traffic', 'construction',
        'development', 'zoning', 'budget', 'tax'
    ],
}

# (id, display name, icon, keywords)
_TECHNOLOGY_SUBCATEGORIES = [
    ('gadgets', 'Gadgets', 'iphone',
     ['gadget', 'device', 'hardware', 'smartphone', 'tablet', 'laptop', 'computer']),
    ('software', 'Software', 'app',
     ['software', 'app', 'application', 'program', 'code', 'development', 'programming']),
    ('ai', 'Artificial Intelligence', 'brain.head.profile',
     ['ai', 'artificial intelligence', 'machine learning', 'neural network', 'deep learning',
      'automation']),
    ('cybersecurity', 'Cybersecurity', 'shield',
     ['cybersecurity', 'security', 'hack', 'privacy', 'encryption', 'malware', 'virus']),
    ('mobile', 'Mobile', 'phone',
     ['mobile', 'smartphone', 'ios', 'android', 'app store', 'mobile app']),
    ('gaming', 'Gaming', 'gamecontroller',
     ['gaming', 'game', 'video game', 'esports', 'console', 'pc gaming']),
    ('internet', 'Internet', 'wifi',
     ['internet', 'web', 'online', 'website', 'browser', 'social media']),
    ('robotics', 'Robotics', 'robot',
     ['robot', 'robotics', 'automation', 'drone', 'autonomous']),
    ('blockchain', 'Blockchain', 'link',
     ['blockchain', 'cryptocurrency', 'bitcoin', 'ethereum', 'crypto', 'nft']),
    ('cloud_computing', 'Cloud Computing', 'cloud',
     ['cloud', 'aws', 'azure', 'google cloud', 'server', 'hosting']),
    ('data_science', 'Data Science', 'chart.bar',
     ['data', 'analytics', 'big data', 'statistics', 'database']),
    ('innovation', 'Innovation', 'lightbulb',
     ['innovation', 'startup', 'tech', 'breakthrough', 'invention']),
]

# Business and science subcategories match on the words of their display names.
_BUSINESS_SUBCATEGORIES = [
    ('finance', 'Finance', 'dollarsign.circle'),
    ('economy', 'Economy', 'chart.line.uptrend.xyaxis'),
    ('markets', 'Markets', 'chart.bar'),
    ('startups', 'Startups', 'rocket'),
    ('corporate', 'Corporate', 'building.2'),
    ('real_estate', 'Real Estate', 'house'),
    ('energy', 'Energy', 'bolt'),
    ('automotive', 'Automotive', 'car'),
    ('retail', 'Retail', 'bag'),
    ('manufacturing', 'Manufacturing', 'gear'),
]

_SCIENCE_SUBCATEGORIES = [
    ('physics', 'Physics', 'atom'),
    ('chemistry', 'Chemistry', 'flask'),
    ('biology', 'Biology', 'leaf'),
    ('astronomy', 'Astronomy', 'star'),
    ('climate', 'Climate', 'thermometer'),
    ('space', 'Space', 'moon'),
    ('environment', 'Environment', 'globe'),
    ('research', 'Research', 'magnifyingglass'),
    ('discovery', 'Discovery', 'lightbulb'),
]


def _name_keywords(display_name: str) -> List[str]:
    return display_name.lower().split(' ')


SUBCATEGORIES: Dict[Category, List[Subcategory]] = {
    Category.TECHNOLOGY: [
        Subcategory(sid, name, icon, tuple(keywords))
        for sid, name, icon, keywords in _TECHNOLOGY_SUBCATEGORIES
    ],
    Category.BUSINESS: [
        Subcategory(sid, name, icon, tuple(_name_keywords(name)))
        for sid, name, icon in _BUSINESS_SUBCATEGORIES
    ],
    Category.SCIENCE: [
        Subcategory(sid, name, icon, tuple(_name_keywords(name)))
        for sid, name, icon in _SCIENCE_SUBCATEGORIES
    ],
}

BREAKING_KEYWORDS: Tuple[str, ...] = (
    'breaking', 'urgent', 'alert', 'emergency', 'crisis', 'disaster', 'attack', 'accident',
    'death', 'arrest', 'resignation', 'election', 'victory', 'defeat', 'announcement',
    'decision'
)

HIGH_PRIORITY_KEYWORDS: Tuple[str, ...] = (
    'breaking', 'urgent', 'crisis', 'emergency', 'critical', 'important', 'major',
    'significant'
)

@dataclass(frozen=True)
class Lexicon:
    """
    Immutable keyword tables used by the classifier and signal detector.
    """
    category_keywords: Mapping[Category, Tuple[str, ...]]
    subcategories: Mapping[Category, Tuple[Subcategory, ...]]
    breaking_keywords: Tuple[str, ...] = BREAKING_KEYWORDS
    high_priority_keywords: Tuple[str, ...] = HIGH_PRIORITY_KEYWORDS

    def keywords_for(self, category: Category) -> Tuple[str, ...]:
        return self.category_keywords.get(category, ())

    def subcategories_for(self, category: Category) -> Tuple[Subcategory, ...]:
        return self.subcategories.get(category, ())

    def subcategory(self, category: Category, subcategory_id: str) -> Optional[Subcategory]:
        for sub in self.subcategories_for(category):
            if sub.id == subcategory_id:
                return sub
        return None

    def innovation_keywords(self) -> Tuple[str, ...]:
        """Keywords that lift technology articles to high priority."""
        sub = self.subcategory(Category.TECHNOLOGY, 'innovation')
        return sub.keywords if sub else ()


def _freeze_keywords(keywords: Iterable[str]) -> Tuple[str, ...]:
    return tuple(k.strip().lower() for k in keywords if k and k.strip())


def build_lexicon(
    category_overrides: Optional[Mapping[str, Iterable[str]]] = None,
    subcategory_overrides: Optional[Mapping[str, Mapping[str, Iterable[str]]]] = None,
) -> Lexicon:
    """
    Build a lexicon from the built-in tables, optionally replacing keyword lists.

    Args:
        category_overrides: category id -> keywords
        subcategory_overrides: category id -> subcategory id -> keywords

    Returns:
        A new immutable Lexicon
    """
    categories = {category: _freeze_keywords(CATEGORY_KEYWORDS[category]) for category in Category}
    for name, keywords in (category_overrides or {}).items():
        try:
            category = Category(name.lower())
        except ValueError:
            logger.warning(f"Ignoring keyword override for unknown category: {name}")
            continue
        categories[category] = _freeze_keywords(keywords)

    subcategories = {category: list(subs) for category, subs in SUBCATEGORIES.items()}
    for name, overrides in (subcategory_overrides or {}).items():
        try:
            category = Category(name.lower())
        except ValueError:
            logger.warning(f"Ignoring subcategory override for unknown category: {name}")
            continue
        subs = subcategories.get(category, [])
        for sub_id, keywords in overrides.items():
            for i, sub in enumerate(subs):
                if sub.id == sub_id:
                    subs[i] = Subcategory(sub.id, sub.display_name, sub.icon,
                                          _freeze_keywords(keywords))
                    break
            else:
                logger.warning(f"Ignoring override for unknown subcategory {name}.{sub_id}")

    return Lexicon(
        category_keywords=MappingProxyType(categories),
        subcategories=MappingProxyType({c: tuple(s) for c, s in subcategories.items()}),
    )


def load_lexicon(config) -> Lexicon:
    """
    Build the lexicon described by a ``Config`` (see ``lexicon`` section).
    """
    return build_lexicon(
        config.get('lexicon.categories') or {},
        config.get('lexicon.subcategories') or {},
    )


DEFAULT_LEXICON = build_lexicon()
