"""Keyword classifier mapping goal text to a specific goal or a broad category."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

GENERAL_CATEGORY = "general"


@dataclass(frozen=True)
class KeywordRule:
    """One entry of an ordered keyword table."""

    key: str
    keywords: Tuple[str, ...]

    def matches(self, lowered_text: str) -> List[str]:
        return [keyword for keyword in self.keywords if keyword in lowered_text]


def _rule(key: str, *keywords: str) -> KeywordRule:
    return KeywordRule(key=key, keywords=tuple(keyword.lower() for keyword in keywords))


# Evaluated top to bottom; the first rule with any hit wins. Narrow phrases sit
# above the broad category table so that e.g. "sourdough" never scores as fitness.
SPECIFIC_GOAL_RULES: Sequence[KeywordRule] = (
    _rule("sourdough", "sourdough", "bread baking", "bread making", "sourdough bread master"),
    _rule("treehouse", "treehouse", "tree house", "build a treehouse"),
    _rule("juggling", "juggle", "juggling", "perform at parties"),
    _rule("vegetable_garden", "vegetable garden", "grow vegetables", "self-sufficient", "grow a vegetable garden"),
    _rule("beatboxing", "beatbox", "beatboxing", "beat box", "join a band"),
    _rule("origami", "origami", "paper folding", "teach others"),
    _rule("youtube", "youtube", "youtube channel", "subscribers", "10k subscribers"),
    _rule("scuba", "scuba", "diving instructor", "underwater", "certified scuba diving instructor"),
    _rule("day_trading", "day trading", "trading", "stocks", "forex", "consistent profits"),
    _rule(
        "public_speaking",
        "public speaking",
        "fear of speaking",
        "presentation",
        "overcome my fear of public speaking",
    ),
    _rule("minimalism", "minimalist", "declutter", "minimalism", "become minimalist"),
    _rule("lucid_dreaming", "lucid dream", "lucid dreaming", "consistently", "learn to lucid dream"),
    _rule(
        "friendship",
        "make friends",
        "friendship",
        "social connections",
        "genuine friendships",
        "5 new genuine friendships",
    ),
    _rule("reconnect_friends", "reconnect", "old friends", "strengthen bonds", "reconnect with old friends"),
    _rule("photography", "photography", "photographer", "photos", "stunning portfolio"),
    _rule("calligraphy", "calligraphy", "beautiful art", "hand lettering"),
    _rule("magic_tricks", "magic tricks", "amaze my friends", "magic", "magician"),
    _rule("chess", "chess", "compete in tournaments", "chess master"),
    _rule("wine", "wine connoisseur", "sommelier", "wine tasting", "wine"),
    _rule("guitar", "learn to play guitar", "guitar", "open mic nights", "play guitar"),
    _rule("weight_loss", "lose 30 pounds", "lose weight", "best shape of my life", "get in shape"),
    _rule("tiny_house", "tiny house", "live off-grid", "off grid"),
    _rule("food_truck", "food truck business", "food truck"),
    _rule("freelance_design", "freelance graphic designer", "graphic design"),
    _rule("podcast", "launch my own podcast", "podcast", "1000 listeners"),
    _rule("early_riser", "wake up at 5 AM", "more productive", "5 AM"),
    _rule("rock_climbing", "rock climbing", "conquer my first mountain", "climbing"),
    _rule("triathlon", "triathlon", "complete a triathlon"),
    _rule("martial_arts", "martial arts", "black belt", "karate", "judo", "taekwondo"),
    _rule("dating", "improve my dating life", "meaningful relationship", "dating"),
    _rule("parenting", "better parent", "quality time with my kids", "parenting"),
    _rule("travel", "visit 10 new countries", "new countries", "travel the world"),
    _rule("survival", "survival skills", "camping alone", "wilderness"),
    _rule("hiking", "hike the entire", "appalachian trail", "long distance hiking"),
    _rule("language_learning", "learn a new language every", "new language", "language every"),
    _rule("pushups", "100 push-ups", "push-ups in a row", "pushups"),
    _rule("meditation", "meditate daily", "inner peace", "meditation"),
    _rule("reading", "read 52 books", "books this year", "reading challenge"),
    _rule("cooking", "cook", "cooking", "chef", "recipe", "baking", "culinary"),
    _rule("gardening", "garden", "gardening", "grow plants"),
)

# Declaration order doubles as the tie-break order.
CATEGORY_RULES: Sequence[KeywordRule] = (
    _rule(
        "fitness",
        "run", "marathon", "fitness", "exercise", "workout", "gym", "train", "jog", "lose weight",
        "gain muscle", "get fit", "shape", "cardio", "strength", "bike", "cycle", "swim", "yoga", "pilates",
    ),
    _rule(
        "learning",
        "learn language", "study language", "spanish", "french", "german", "chinese", "skill course",
        "education", "programming", "coding", "guitar lessons", "piano lessons",
    ),
    _rule(
        "writing",
        "write", "novel", "book", "story", "blog", "article", "screenplay", "poetry", "journal",
        "memoir", "fiction", "publish",
    ),
    _rule(
        "business",
        "business", "startup", "company", "revenue", "profit", "sales", "customers", "launch", "product",
        "service", "marketing", "brand", "entrepreneur",
    ),
    _rule(
        "health",
        "health", "diet", "nutrition", "sleep", "meditation", "mindfulness", "therapy", "wellness",
        "habit", "routine", "lifestyle", "mental health",
    ),
    _rule(
        "creative",
        "create art", "build project", "design", "art project", "craft project", "video",
        "music composition", "paint", "sculpt", "draw",
    ),
)


@dataclass
class Classification:
    """Either ``goal_id`` (specific override) or ``category`` (broad scorer) is set."""

    goal_id: Optional[str] = None
    category: Optional[str] = None
    matched_keywords: List[str] = field(default_factory=list)
    scores: Dict[str, int] = field(default_factory=dict)

    @property
    def is_specific(self) -> bool:
        return self.goal_id is not None


def match_specific_goal(text: str) -> Optional[Tuple[str, List[str]]]:
    lowered = (text or "").lower()
    for rule in SPECIFIC_GOAL_RULES:
        hits = rule.matches(lowered)
        if hits:
            return rule.key, hits
    return None


def score_categories(text: str) -> Dict[str, int]:
    lowered = (text or "").lower()
    return {rule.key: len(rule.matches(lowered)) for rule in CATEGORY_RULES}


def classify_goal(text: str) -> Classification:
    """Run the override table, then the broad scorer; falls back to ``general``."""
    specific = match_specific_goal(text)
    if specific:
        goal_id, hits = specific
        logger.debug("Specific goal %s matched on %s", goal_id, hits)
        return Classification(goal_id=goal_id, matched_keywords=hits)

    scores = score_categories(text)
    best_category = GENERAL_CATEGORY
    best_score = 0
    for rule in CATEGORY_RULES:
        if scores[rule.key] > best_score:
            best_score = scores[rule.key]
            best_category = rule.key
    lowered = (text or "").lower()
    hits = next((rule.matches(lowered) for rule in CATEGORY_RULES if rule.key == best_category), [])
    logger.debug("Category scores %s -> %s", scores, best_category)
    return Classification(category=best_category, matched_keywords=hits, scores=scores)
