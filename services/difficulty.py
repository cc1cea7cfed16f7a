# services/difficulty.py
import logging
from typing import Dict, Mapping, Optional, Union

from pydantic import ValidationError

from errors import InvalidRequest
from services.schemas import Difficulty, DifficultyDistribution

logger = logging.getLogger(__name__)

_SYNONYMS = {
    "easy": Difficulty.EASY, "beginner": Difficulty.EASY, "basic": Difficulty.EASY,
    "medium": Difficulty.MEDIUM, "intermediate": Difficulty.MEDIUM, "moderate": Difficulty.MEDIUM,
    "hard": Difficulty.HARD, "advanced": Difficulty.HARD, "difficult": Difficulty.HARD,
}


def normalize_difficulty(value) -> Difficulty:
    """Map a free-form difficulty label onto the enum; unknown -> medium."""
    if isinstance(value, Difficulty):
        return value
    label = str(value or "").strip().lower()
    if not label:
        logger.debug("Missing difficulty, defaulting to medium")
        return Difficulty.MEDIUM
    level = _SYNONYMS.get(label)
    if level is None:
        logger.warning(f'Unknown difficulty "{value}", defaulting to medium')
        return Difficulty.MEDIUM
    return level


def resolve_distribution(
    difficulty: Optional[str] = None,
    distribution: Union[Mapping[str, float], DifficultyDistribution, None] = None,
) -> DifficultyDistribution:
    """Turn the legacy single level or an explicit split into one distribution.

    An explicit distribution wins over the legacy level; with neither the
    whole quiz is medium.
    """
    if isinstance(distribution, DifficultyDistribution):
        return distribution
    if distribution:
        try:
            return DifficultyDistribution(**dict(distribution))
        except (TypeError, ValidationError) as e:
            raise InvalidRequest(f"Invalid difficulty distribution: {e}") from e

    if difficulty in (None, ""):
        return DifficultyDistribution.from_level(Difficulty.MEDIUM)
    try:
        level = Difficulty(str(difficulty).strip().lower())
    except ValueError:
        raise InvalidRequest("Difficulty must be one of: easy, medium, hard")
    return DifficultyDistribution.from_level(level)


def split_counts(distribution: DifficultyDistribution, total: int) -> Dict[str, int]:
    """Per-level question counts for `total` questions (largest remainder)."""
    shares = distribution.as_dict()
    weight = sum(shares.values()) or 100
    exact = {k: total * v / weight for k, v in shares.items()}
    counts = {k: int(v) for k, v in exact.items()}
    left = total - sum(counts.values())
    for k in sorted(exact, key=lambda k: exact[k] - counts[k], reverse=True)[:left]:
        counts[k] += 1
    return counts


def describe_distribution(distribution: DifficultyDistribution, total: int) -> str:
    counts = split_counts(distribution, total)
    parts = [f"{n} {level}" for level, n in counts.items() if n]
    return ", ".join(parts) if parts else f"{total} medium"
